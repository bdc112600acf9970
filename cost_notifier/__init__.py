"""Report AWS Cost Explorer charges to a Slack channel."""

__version__ = "1.0.0"
