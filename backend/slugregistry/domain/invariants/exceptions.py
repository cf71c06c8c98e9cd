class InvariantViolation(Exception):
    """Base class for domain rule violations surfaced to the caller."""


class SlugValidationError(InvariantViolation):
    def __init__(self, message, *, path=None, site_id=None):
        super().__init__(message)
        self.path = path
        self.site_id = site_id


class SlugAlreadyOwned(Exception):
    """
    Raised when a slug is held by a live owner (another object or field).

    Rows deleted earlier in the same save are not restored.
    """

    def __init__(self, *, path, site_id, fieldname, object_id, class_id=None):
        super().__init__(
            f'Slug "{path}" (site {site_id}) is already used by object '
            f"{object_id}, fieldname: {fieldname}"
        )
        self.path = path
        self.site_id = site_id
        self.fieldname = fieldname
        self.object_id = object_id
        self.class_id = class_id


class SlugActionUnavailable(Exception):
    """The owner a slug points to is gone; the slug row has been dropped."""


class SlugPersistenceError(Exception):
    """Wraps a storage failure. The original error is kept as __cause__."""
