class RecordsError(Exception):
    status_code = 400

    def __init__(self, message, status_code=None):
        self.message = message
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)


class NotFound(RecordsError):
    """An entity id does not resolve."""
    status_code = 404

    def __init__(self, label):
        super().__init__(f"{label} not found")
        self.label = label


class DuplicateKey(RecordsError):
    """A natural key collides with another record (pre-check or unique index)."""

    def __init__(self, label, fields):
        self.label = label
        self.fields = tuple(fields)
        readable = " or ".join(f.replace("_", " ") for f in self.fields)
        super().__init__(f"{label} with this {readable} already exists")


class MissingReference(RecordsError):
    """A referenced entity id does not exist."""

    def __init__(self, label):
        super().__init__(f"{label} not found")
        self.label = label


class ReferenceMismatch(RecordsError):
    """Module department differs from its course's department."""


class HasDependents(RecordsError):
    """A delete is blocked by live children."""


class ValidationError(RecordsError):
    """Out-of-range numbers, bad weights, bad dates, short passwords."""
