class QuickEditConfigError(ValueError):
    """Raised when a quick edit field definition cannot be registered."""

    def __init__(self, message: str, field_key: object = None):
        super().__init__(message)
        self.field_key = field_key
