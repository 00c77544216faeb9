"""Tests for BillSession."""

from datetime import datetime

import pytest

from medbill.data_store import StoreDetailsStore
from medbill.models import StoreDetails
from medbill.session import BillSession


@pytest.fixture
def data_store(tmp_path) -> StoreDetailsStore:
    return StoreDetailsStore(tmp_path / "store.xlsx")


class TestBillSession:
    """Tests for BillSession."""

    def test_store_edits_are_uppercased(self):
        session = BillSession()
        stored = session.set_store_field("store_name", "shiv medical")
        assert stored == "SHIV MEDICAL"
        assert session.store.store_name == "SHIV MEDICAL"

    def test_unknown_store_field_raises(self):
        with pytest.raises(KeyError):
            BillSession().set_store_field("owner", "x")

    def test_customer_and_item_text_keep_case(self):
        session = BillSession()
        session.set_customer_field("customer_name", "Jane Doe")
        session.items.add_item()
        session.items.update_field(0, "product_name", "Telma 40")
        assert session.customer.customer_name == "Jane Doe"
        assert session.items[0].product_name == "Telma 40"

    def test_totals_use_cash_discount(self):
        session = BillSession()
        session.items.add_item()
        session.items.update_field(0, "quantity", "3")
        session.items.update_field(0, "unit_price", "227.14")
        session.set_cash_discount("0,5")

        totals = session.totals()

        assert totals.cash_discount == 0.5
        assert totals.total == 680
        assert totals.round_off == 0.92

    def test_assemble_and_file_base(self):
        session = BillSession()
        session.set_customer_field("customer_name", "Jane Doe!!")
        session.set_meta_field("bill_date", "2024-02-18")
        session.set_meta_field("bill_time", "09:15")
        session.items.add_item()

        doc = session.assemble()

        assert doc.bill_date == "18/02/2024"
        assert [row.serial for row in doc.rows] == [1]
        assert session.file_base() == "Jane_Doe_0915_2024-02-18"

    def test_stamp_now(self):
        session = BillSession()
        session.stamp_now(datetime(2024, 2, 18, 9, 15, 42))
        assert session.meta.bill_date == "2024-02-18"
        assert session.meta.bill_time == "09:15"

    def test_first_run_persists_defaults(self, data_store):
        session = BillSession()
        session.load_store_details(data_store)

        assert data_store.path.exists()
        assert data_store.load() == StoreDetails.defaults().to_mapping()

    def test_load_is_verbatim(self, data_store):
        saved = {
            "store_name": "lower case store",
            "store_address": "line one\nline two",
            "store_subtitle": "",
            "jurisdiction": "indore",
            "dl_number": "dl-1",
            "gst_number": "gst-1",
        }
        data_store.save(saved)

        session = BillSession()
        session.load_store_details(data_store)

        assert session.store.to_mapping() == saved

    def test_persist_round_trip(self, data_store):
        session = BillSession()
        session.set_store_field("store_name", "new name")
        session.persist_store_details(data_store)

        reloaded = BillSession(StoreDetails())
        reloaded.load_store_details(data_store)
        assert reloaded.store.store_name == "NEW NAME"

    def test_unreadable_file_is_not_overwritten(self, data_store):
        data_store.path.write_bytes(b"garbage")

        session = BillSession()
        session.load_store_details(data_store)

        assert data_store.path.read_bytes() == b"garbage"
        assert session.store == StoreDetails.defaults()
