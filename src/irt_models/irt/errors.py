from irt_models.irt.enums import IrmType


class UnsupportedParameterError(NotImplementedError):
    """Raised when an item model variant has no such parameter."""

    def __init__(self, operation: str, model_type: IrmType) -> None:
        self.operation = operation
        self.model_type = model_type
        super().__init__(
            f"{operation} is not supported by {model_type.value} items"
        )
