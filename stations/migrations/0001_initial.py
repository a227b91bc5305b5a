import django.db.models.deletion
from django.db import migrations, models


PRODUCT_CHOICES = [
    ("PETROL", "Petrol"),
    ("DIESEL", "Diesel"),
    ("GAS", "Gas"),
    ("KEROSENE", "Kerosene"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Station",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150)),
                ("address", models.TextField(blank=True)),
                ("ward", models.CharField(blank=True, max_length=100)),
                ("lga", models.CharField(blank=True, max_length=100)),
                ("state", models.CharField(blank=True, max_length=100)),
                ("longitude", models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True)),
                ("latitude", models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True)),
                ("active", models.BooleanField(default=True)),
                ("petrol_price_per_litre", models.DecimalField(decimal_places=4, default=0, max_digits=12)),
                ("diesel_price_per_litre", models.DecimalField(decimal_places=4, default=0, max_digits=12)),
                ("gas_price_per_litre", models.DecimalField(decimal_places=4, default=0, max_digits=12)),
                ("kerosene_price_per_litre", models.DecimalField(decimal_places=4, default=0, max_digits=12)),
                ("petrol_volume", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("diesel_volume", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("gas_volume", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("kerosene_volume", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Pump",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("pump_number", models.PositiveIntegerField()),
                ("dispensed_product", models.CharField(choices=PRODUCT_CHOICES, default="PETROL", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "station",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pumps",
                        to="stations.station",
                    ),
                ),
            ],
            options={
                "ordering": ["station", "pump_number"],
            },
        ),
        migrations.AddConstraint(
            model_name="pump",
            constraint=models.UniqueConstraint(
                fields=("station", "pump_number"),
                name="unique_pump_number_per_station",
            ),
        ),
        migrations.CreateModel(
            name="PumpDailyRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("record_date", models.DateField()),
                ("volume_sold", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("total_revenue", models.DecimalField(decimal_places=4, default=0, max_digits=18)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "pump",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="daily_records",
                        to="stations.pump",
                    ),
                ),
                (
                    "station",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="daily_records",
                        to="stations.station",
                    ),
                ),
            ],
            options={
                "ordering": ["-record_date", "pump"],
            },
        ),
        migrations.AddConstraint(
            model_name="pumpdailyrecord",
            constraint=models.UniqueConstraint(
                fields=("pump", "record_date"),
                name="unique_daily_record_per_pump",
            ),
        ),
    ]
