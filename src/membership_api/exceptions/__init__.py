# membership_api/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Domain errors (NotFoundError, AlreadyExistsError, ...)
# │   ├── integrity_classifier.py    # Engine-specific constraint classification
# │   └── mapper.py                  # Classification -> domain error + db_error_handler
from .base import (
    ErrorKind,
    RepositoryError,
    NotFoundError,
    AlreadyExistsError,
    MissingRequiredFieldError,
    ReferenceNotFoundError,
    UnknownStoreError,
)

__all__ = [
    "ErrorKind",
    "RepositoryError",
    "NotFoundError",
    "AlreadyExistsError",
    "MissingRequiredFieldError",
    "ReferenceNotFoundError",
    "UnknownStoreError",
]
