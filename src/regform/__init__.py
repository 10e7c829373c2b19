"""regform: reactive field validation for a registration form."""

from regform.domain.fields import FieldName
from regform.errors import UnknownFieldError
from regform.form.model import FormModel

__version__ = "0.1.0"

__all__ = ["FieldName", "FormModel", "UnknownFieldError", "__version__"]
