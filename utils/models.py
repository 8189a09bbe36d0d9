from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from utils.errors import ValidationError


class Medicine(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    sub_category: str = Field(default="", description="Therapeutic sub category")
    product_name: Optional[str] = Field(default=None, description="Brand or product name")
    salt_composition: str = Field(default="", description="Active salts and strengths")
    product_price: str = Field(default="", description="Price as listed, kept as text")
    product_manufactured: str = Field(default="", description="Manufacturer")
    medicine_desc: str = Field(default="", description="Free-text description of the medicine")
    side_effects: str = Field(default="", description="Known side effects")
    drug_interactions: str = Field(default="", description="Known drug interactions")

    @classmethod
    def from_request(cls, body: Any) -> "Medicine":
        """Build a Medicine from a decoded JSON request body.

        A missing body is treated as an empty object. Unknown keys are
        dropped; values that cannot be read as text raise ValidationError.
        """
        if body is None:
            body = {}
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object")
        try:
            return cls.model_validate(body)
        except PydanticValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            raise ValidationError(f"Invalid medicine fields: {', '.join(fields)}")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> Dict[str, Any]:
        """Map a stored document through the schema, filling defaults but keeping its id.

        Stored values are not re-validated: a field holding a list or any other
        non-text value is passed through as stored, only absent or null fields
        get their defaults.
        """
        mapped = {}
        if "_id" in document:
            mapped["_id"] = str(document["_id"])
        for name, field in cls.model_fields.items():
            value = document.get(name)
            if value is None:
                value = field.default
            if value is not None:
                mapped[name] = value
        return mapped

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
