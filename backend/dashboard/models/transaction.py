"""Transaction data models."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from dashboard.utils.timestamp import parse_timestamp

DEFAULT_DESCRIPTION = "N/A"
DEFAULT_CATEGORY = "Unknown"


class Transaction(BaseModel):
    """Transaction model."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Fjallraven Foldsack No. 1 Backpack",
                "description": "Your perfect pack for everyday use",
                "price": 329.85,
                "dateOfSale": "2021-11-27T14:59:54+00:00",
                "sold": False,
                "category": "men's clothing",
            }
        },
    )

    id: int = Field(..., description="Feed identifier (not enforced unique)")
    title: str = Field(..., description="Product title")
    description: str = Field(default=DEFAULT_DESCRIPTION, description="Product description")
    price: float = Field(..., description="Sale price")
    date_of_sale: datetime = Field(..., description="Sale timestamp (UTC)")
    sold: bool = Field(..., description="Whether the item was sold")
    category: str = Field(default=DEFAULT_CATEGORY, description="Product category")


class FeedTransaction(BaseModel):
    """Raw item from the third-party seed feed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    description: Optional[str] = None
    price: float
    date_of_sale: str = Field(..., description="Sale timestamp (ISO8601)")
    sold: bool
    category: Optional[str] = None

    @field_validator("date_of_sale")
    @classmethod
    def validate_date_of_sale(cls, v: str) -> str:
        """Validate timestamp can be parsed."""
        try:
            parse_timestamp(v)
            return v
        except Exception as e:
            raise ValueError(f"Invalid timestamp format: {str(e)}")

    def to_transaction(self) -> Transaction:
        """Normalize into a stored transaction, filling defaults for blanks."""
        return Transaction(
            id=self.id,
            title=self.title,
            description=self.description or DEFAULT_DESCRIPTION,
            price=self.price,
            date_of_sale=parse_timestamp(self.date_of_sale),
            sold=self.sold,
            category=self.category or DEFAULT_CATEGORY,
        )
