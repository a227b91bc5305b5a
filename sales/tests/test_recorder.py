from datetime import timedelta
from decimal import Decimal

from django.db import DatabaseError
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from accounts.constants import UserRole
from accounts.models import User
from sales.models import Sale, compute_total_price
from sales.services.recorder import SaleRecorder
from stations.constants import Product
from stations.models import Pump, PumpDailyRecord, Station
from stations.services.daily_records import DailyAggregateTracker


class FailingUpsertTracker(DailyAggregateTracker):

    def upsert(self, *args, **kwargs):
        raise DatabaseError("daily record write failed")


class FailingAfterReverseTracker(DailyAggregateTracker):

    def reverse(self, *args, **kwargs):
        super().reverse(*args, **kwargs)
        raise DatabaseError("daily record write failed")


class SaleRecorderTestCase(TestCase):

    def setUp(self):
        self.station = Station.objects.create(
            name="Station Ikeja",
            petrol_price_per_litre=Decimal("650.50"),
            diesel_price_per_litre=Decimal("980.00"),
        )
        self.pump = Pump.objects.create(station=self.station, pump_number=1)
        self.user = User.objects.create_user(
            username="manager",
            email="manager@test.com",
            password="pass1234",
            role=UserRole.MANAGER,
        )
        self.recorder = SaleRecorder()

    def _sale_data(self, **overrides):
        data = {
            "product": Product.PETROL,
            "opening_meter_reading": Decimal("1000.00"),
            "closing_meter_reading": Decimal("1200.00"),
            "pump_id": self.pump.pk,
        }
        data.update(overrides)
        return data

    def _daily_record(self, pump=None):
        return PumpDailyRecord.objects.get(
            pump=pump or self.pump,
            record_date=timezone.localdate(),
        )

    # =========================
    # CREATE
    # =========================

    def test_total_price_uses_station_price(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)

        self.assertEqual(sale.price_per_litre, Decimal("650.50"))
        self.assertEqual(sale.total_price, Decimal("130100.0000"))
        self.assertEqual(sale.station, self.station)
        self.assertEqual(sale.recorded_by, self.user)

    def test_station_price_wins_over_client_price(self):
        sale = self.recorder.create(
            self._sale_data(price_per_litre=Decimal("1.00")),
            self.user.pk,
        )

        self.assertEqual(sale.price_per_litre, Decimal("650.50"))

    def test_create_opens_daily_record(self):
        self.recorder.create(self._sale_data(), self.user.pk)

        record = self._daily_record()
        self.assertEqual(record.volume_sold, Decimal("200.00"))
        self.assertEqual(record.total_revenue, Decimal("130100.0000"))
        self.assertEqual(record.station, self.station)

    def test_readings_are_kept_at_meter_precision(self):
        sale = self.recorder.create(
            self._sale_data(opening_meter_reading=Decimal("1000.004")),
            self.user.pk,
        )

        sale.refresh_from_db()
        self.assertEqual(sale.opening_meter_reading, Decimal("1000.00"))
        self.assertEqual(
            sale.total_price,
            compute_total_price(
                sale.opening_meter_reading,
                sale.closing_meter_reading,
                sale.price_per_litre,
            ),
        )
        self.assertEqual(sale.total_price, Decimal("130100.0000"))
        record = self._daily_record()
        self.assertEqual(record.volume_sold, Decimal("200.00"))
        self.assertEqual(record.total_revenue, Decimal("130100.0000"))

    def test_readings_equal_at_meter_precision_are_rejected(self):
        with self.assertRaises(ValidationError):
            self.recorder.create(
                self._sale_data(
                    opening_meter_reading=Decimal("1000.001"),
                    closing_meter_reading=Decimal("1000.004"),
                ),
                self.user.pk,
            )

        self.assertFalse(Sale.objects.exists())

    def test_client_price_is_kept_at_price_precision(self):
        bare = Station.objects.create(name="Station Bare")
        pump = Pump.objects.create(station=bare, pump_number=1)

        sale = self.recorder.create(
            self._sale_data(pump_id=pump.pk, price_per_litre=Decimal("700.00005")),
            self.user.pk,
        )

        sale.refresh_from_db()
        self.assertEqual(sale.price_per_litre, Decimal("700.0001"))
        self.assertEqual(sale.total_price, Decimal("140000.0200"))

    def test_sale_is_rolled_back_when_daily_record_fails(self):
        recorder = SaleRecorder(tracker=FailingUpsertTracker())

        with self.assertRaises(DatabaseError):
            recorder.create(self._sale_data(), self.user.pk)

        self.assertFalse(Sale.objects.exists())
        self.assertFalse(PumpDailyRecord.objects.exists())

    def test_same_day_sales_share_one_daily_record(self):
        self.recorder.create(self._sale_data(), self.user.pk)
        self.recorder.create(
            self._sale_data(
                opening_meter_reading=Decimal("1200.00"),
                closing_meter_reading=Decimal("1250.00"),
            ),
            self.user.pk,
        )

        self.assertEqual(PumpDailyRecord.objects.filter(pump=self.pump).count(), 1)
        record = self._daily_record()
        self.assertEqual(record.volume_sold, Decimal("250.00"))
        self.assertEqual(record.total_revenue, Decimal("162625.0000"))

    def test_product_without_price_falls_back_to_petrol(self):
        gas_pump = Pump.objects.create(
            station=self.station,
            pump_number=2,
            dispensed_product=Product.GAS,
        )

        sale = self.recorder.create(
            self._sale_data(product=Product.GAS, pump_id=gas_pump.pk),
            self.user.pk,
        )

        self.assertEqual(sale.price_per_litre, Decimal("650.50"))

    def test_unpriced_station_uses_client_price(self):
        bare = Station.objects.create(name="Station Bare")
        pump = Pump.objects.create(station=bare, pump_number=1)

        sale = self.recorder.create(
            self._sale_data(pump_id=pump.pk, price_per_litre=Decimal("700")),
            self.user.pk,
        )

        self.assertEqual(sale.price_per_litre, Decimal("700"))
        self.assertEqual(sale.total_price, Decimal("140000.0000"))

    def test_unpriced_station_without_client_price_is_rejected(self):
        bare = Station.objects.create(name="Station Bare")
        pump = Pump.objects.create(station=bare, pump_number=1)

        with self.assertRaises(ValidationError):
            self.recorder.create(self._sale_data(pump_id=pump.pk), self.user.pk)

        self.assertFalse(Sale.objects.exists())

    @override_settings(SALES_REQUIRE_STATION_PRICE=True)
    def test_client_price_refused_when_station_price_required(self):
        bare = Station.objects.create(name="Station Bare")
        pump = Pump.objects.create(station=bare, pump_number=1)

        with self.assertRaises(ValidationError):
            self.recorder.create(
                self._sale_data(pump_id=pump.pk, price_per_litre=Decimal("700")),
                self.user.pk,
            )

    def test_closing_not_after_opening_is_rejected(self):
        with self.assertRaises(ValidationError):
            self.recorder.create(
                self._sale_data(closing_meter_reading=Decimal("1000.00")),
                self.user.pk,
            )

        self.assertFalse(Sale.objects.exists())
        self.assertFalse(PumpDailyRecord.objects.exists())

    def test_unknown_product_is_rejected(self):
        with self.assertRaises(ValidationError):
            self.recorder.create(self._sale_data(product="JET_A1"), self.user.pk)

    def test_unknown_pump_is_not_found(self):
        with self.assertRaises(NotFound):
            self.recorder.create(self._sale_data(pump_id=99999), self.user.pk)

    def test_unknown_user_is_not_found(self):
        with self.assertRaises(NotFound):
            self.recorder.create(self._sale_data(), 99999)

    # =========================
    # READS
    # =========================

    def test_find_one_with_malformed_id(self):
        with self.assertRaises(NotFound):
            self.recorder.find_one("not-a-uuid")

    def test_find_all_pages(self):
        for start in range(3):
            self.recorder.create(
                self._sale_data(
                    opening_meter_reading=Decimal(start * 100),
                    closing_meter_reading=Decimal(start * 100 + 50),
                ),
                self.user.pk,
            )

        page = self.recorder.find_all(page=2, limit=2)

        self.assertEqual(page.paginator.count, 3)
        self.assertEqual(len(page.object_list), 1)

    def test_find_all_past_last_page_is_not_found(self):
        self.recorder.create(self._sale_data(), self.user.pk)

        with self.assertRaises(NotFound):
            self.recorder.find_all(page=10, limit=2)

        with self.assertRaises(NotFound):
            self.recorder.find_all(page="abc", limit=2)

    def test_find_by_station_unknown_station(self):
        with self.assertRaises(NotFound):
            self.recorder.find_by_station(99999)

    # =========================
    # UPDATE / DELETE
    # =========================

    def test_update_recomputes_total_and_daily_record(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)

        updated = self.recorder.update(
            sale.pk, {"closing_meter_reading": Decimal("1300.00")}
        )

        self.assertEqual(updated.total_price, Decimal("195150.0000"))
        record = self._daily_record()
        self.assertEqual(record.volume_sold, Decimal("300.00"))
        self.assertEqual(record.total_revenue, Decimal("195150.0000"))

    def test_update_explicit_price(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)

        updated = self.recorder.update(sale.pk, {"price_per_litre": Decimal("600")})

        self.assertEqual(updated.total_price, Decimal("120000.0000"))
        self.assertEqual(self._daily_record().total_revenue, Decimal("120000.0000"))

    def test_update_moves_figures_to_new_pump(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)
        other = Pump.objects.create(station=self.station, pump_number=2)

        self.recorder.update(sale.pk, {"pump_id": other.pk})

        self.assertEqual(self._daily_record().volume_sold, Decimal("0.00"))
        self.assertEqual(self._daily_record(other).volume_sold, Decimal("200.00"))

    def test_update_rejects_invalid_readings(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)

        with self.assertRaises(ValidationError):
            self.recorder.update(sale.pk, {"closing_meter_reading": Decimal("900")})

        sale.refresh_from_db()
        self.assertEqual(sale.total_price, Decimal("130100.0000"))
        self.assertEqual(self._daily_record().volume_sold, Decimal("200.00"))

    def test_update_rejects_read_only_fields(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)

        with self.assertRaises(ValidationError):
            self.recorder.update(sale.pk, {"total_price": Decimal("1")})

    def test_update_unknown_sale(self):
        with self.assertRaises(NotFound):
            self.recorder.update(
                "6f1c5f1e-7d1a-4c4b-9a53-000000000000",
                {"product": Product.DIESEL},
            )

    def test_remove_takes_sale_out_of_daily_record(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)

        self.recorder.remove(sale.pk)

        self.assertFalse(Sale.objects.filter(pk=sale.pk).exists())
        record = self._daily_record()
        self.assertEqual(record.volume_sold, Decimal("0.00"))
        self.assertEqual(record.total_revenue, Decimal("0.0000"))

    def test_update_keeps_meter_precision(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)

        self.recorder.update(sale.pk, {"closing_meter_reading": Decimal("1300.006")})

        sale.refresh_from_db()
        self.assertEqual(sale.closing_meter_reading, Decimal("1300.01"))
        self.assertEqual(sale.total_price, Decimal("195156.5050"))
        record = self._daily_record()
        self.assertEqual(record.volume_sold, Decimal("300.01"))
        self.assertEqual(record.total_revenue, Decimal("195156.5050"))

    def test_update_repeating_pump_keeps_charged_price(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)
        Station.objects.filter(pk=self.station.pk).update(
            petrol_price_per_litre=Decimal("700.00")
        )

        updated = self.recorder.update(
            sale.pk,
            {
                "pump_id": self.pump.pk,
                "product": Product.PETROL,
                "closing_meter_reading": Decimal("1300.00"),
            },
        )

        self.assertEqual(updated.price_per_litre, Decimal("650.5000"))
        self.assertEqual(updated.total_price, Decimal("195150.0000"))

    def test_update_new_product_is_repriced(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)

        updated = self.recorder.update(sale.pk, {"product": Product.DIESEL})

        self.assertEqual(updated.price_per_litre, Decimal("980.0000"))
        self.assertEqual(updated.total_price, Decimal("196000.0000"))

    def test_update_is_rolled_back_when_daily_record_fails(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)
        recorder = SaleRecorder(tracker=FailingUpsertTracker())

        with self.assertRaises(DatabaseError):
            recorder.update(sale.pk, {"closing_meter_reading": Decimal("1300.00")})

        sale.refresh_from_db()
        self.assertEqual(sale.closing_meter_reading, Decimal("1200.00"))
        self.assertEqual(sale.total_price, Decimal("130100.0000"))
        record = self._daily_record()
        self.assertEqual(record.volume_sold, Decimal("200.00"))
        self.assertEqual(record.total_revenue, Decimal("130100.0000"))

    def test_remove_is_rolled_back_when_daily_record_fails(self):
        sale = self.recorder.create(self._sale_data(), self.user.pk)
        recorder = SaleRecorder(tracker=FailingAfterReverseTracker())

        with self.assertRaises(DatabaseError):
            recorder.remove(sale.pk)

        self.assertTrue(Sale.objects.filter(pk=sale.pk).exists())
        self.assertEqual(self._daily_record().volume_sold, Decimal("200.00"))

    # =========================
    # REPORTS
    # =========================

    def test_total_sales(self):
        self.assertEqual(self.recorder.total_sales(), Decimal("0"))

        self.recorder.create(self._sale_data(), self.user.pk)

        self.assertEqual(self.recorder.total_sales(), Decimal("130100.0000"))
        self.assertEqual(
            self.recorder.total_sales_by_station(self.station.pk),
            Decimal("130100.0000"),
        )

    def test_total_sales_per_month(self):
        old = self.recorder.create(self._sale_data(), self.user.pk)
        self.recorder.create(self._sale_data(), self.user.pk)
        Sale.objects.filter(pk=old.pk).update(
            created_at=timezone.now() - timedelta(days=70)
        )

        months = self.recorder.total_sales_per_month()

        self.assertEqual(len(months), 2)
        self.assertEqual(months[-1]["month"], timezone.localdate().strftime("%Y-%m"))
        self.assertEqual(months[-1]["total_sale"], Decimal("130100.0000"))

    def test_total_sales_per_week(self):
        self.recorder.create(self._sale_data(), self.user.pk)

        weeks = self.recorder.total_sales_per_week()

        self.assertEqual(len(weeks), 1)
        year, week, _ = timezone.localdate().isocalendar()
        self.assertEqual((weeks[0]["year"], weeks[0]["week"]), (year, week))
        self.assertEqual(weeks[0]["total_sale"], Decimal("130100.0000"))

    def test_daily_sales_by_station(self):
        self.recorder.create(self._sale_data(), self.user.pk)

        days = self.recorder.daily_sales_by_station(self.station.pk)

        self.assertEqual(days, [{
            "date": timezone.localdate(),
            "volume_sold": Decimal("200.00"),
            "total_revenue": Decimal("130100.0000"),
        }])


def test_compute_total_price_rounds_half_up():
    assert compute_total_price(Decimal("0"), Decimal("0.01"), Decimal("0.005")) == Decimal("0.0001")
    assert compute_total_price(Decimal("1000"), Decimal("1200"), Decimal("650.50")) == Decimal("130100.0000")
