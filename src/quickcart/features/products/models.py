"""Data model for store products."""

from tortoise import fields
from ...common.models import TimestampMixin, generate_ksuid


class Product(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    name = fields.CharField(max_length=255)
    description = fields.TextField(null=True)
    price = fields.FloatField(default=0.0, description="Unit price of the product")
    stock = fields.IntField(default=0, description="Units currently in stock")
    # Categories are free-form labels, compared case-sensitively in reports
    category = fields.CharField(max_length=100, null=True, db_index=True)
    supplier = fields.CharField(max_length=255, null=True)

    def __str__(self):
        return f"{self.name} (Stock: {self.stock}, Price: {self.price:.2f})"

    class Meta:
        table = "products"
