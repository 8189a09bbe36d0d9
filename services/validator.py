from utils.errors import ValidationError

class Validator:
    @staticmethod
    def require_param(params, name, message=None):
        """Return the trimmed value of a required query parameter or raise ValidationError."""
        value = params.get(name)
        if value is None or not str(value).strip():
            raise ValidationError(message or f"Missing '{name}' query parameter")
        return str(value).strip()
