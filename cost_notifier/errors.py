class CostNotifierError(Exception):
    """Base class for every failure that aborts a report run."""


class ConfigError(CostNotifierError):
    pass


class InvalidDate(CostNotifierError):
    pass


class InvalidTimestamp(CostNotifierError):
    pass


class MissingField(CostNotifierError):
    def __init__(self, path: str):
        super().__init__(f"missing field in Cost Explorer response: {path}")
        self.path = path


class MalformedCost(CostNotifierError):
    pass


class TransportError(CostNotifierError):
    pass


class SendError(CostNotifierError):
    pass
