# stations/constants.py

from django.db import models


class Product(models.TextChoices):
    PETROL = "PETROL", "Petrol"
    DIESEL = "DIESEL", "Diesel"
    GAS = "GAS", "Gas"
    KEROSENE = "KEROSENE", "Kerosene"


# Station columns holding the configured price and the stock, per product
PRICE_FIELDS = {
    Product.PETROL: "petrol_price_per_litre",
    Product.DIESEL: "diesel_price_per_litre",
    Product.GAS: "gas_price_per_litre",
    Product.KEROSENE: "kerosene_price_per_litre",
}

VOLUME_FIELDS = {
    Product.PETROL: "petrol_volume",
    Product.DIESEL: "diesel_volume",
    Product.GAS: "gas_volume",
    Product.KEROSENE: "kerosene_volume",
}
