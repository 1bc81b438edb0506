"""Tests for the scheme store (save / load / list / update / delete)."""

import json

import pytest

from iitcalc.sdk import SchemeNotFoundError, SchemeStore, TaxInput, get_schemes_dir
from iitcalc.sdk.schemas import SpecialDeductions


@pytest.fixture
def store(tmp_path):
    return SchemeStore(tmp_path / "schemes")


@pytest.fixture
def sample_input():
    return TaxInput(
        monthly_salary=30000,
        special_deductions=SpecialDeductions(housing_rent=1500),
        year_end_bonus=90000,
        bonus_treatment="merged",
    )


class TestSchemeStore:
    """CRUD on a directory-backed store."""

    def test_save_returns_id(self, store, sample_input):
        scheme = store.save("2025 offer", sample_input)

        assert len(scheme.id) == 8
        assert scheme.name == "2025 offer"
        assert scheme.created_at == scheme.updated_at
        assert (store.directory / f"{scheme.id}.json").exists()

    def test_load_round_trip(self, store, sample_input):
        scheme = store.save("offer", sample_input)
        assert store.load(scheme.id) == sample_input

    def test_file_holds_input_not_result(self, store, sample_input):
        scheme = store.save("offer", sample_input)
        record = json.loads((store.directory / f"{scheme.id}.json").read_text())

        assert set(record) == {"meta", "input"}
        assert record["meta"]["name"] == "offer"
        assert record["input"]["monthly_salary"] == 30000
        assert record["input"]["special_deductions"]["housing_rent"] == 1500

    def test_load_missing(self, store):
        assert store.load("deadbeef") is None
        assert store.get("deadbeef") is None

    def test_list_all(self, store, sample_input):
        first = store.save("first", sample_input)
        second = store.save("second", TaxInput(monthly_salary=1))

        summaries = store.list_all()

        assert {s.id for s in summaries} == {first.id, second.id}
        assert {s.name for s in summaries} == {"first", "second"}
        assert not hasattr(summaries[0], "input")

    def test_list_sorted_by_updated_desc(self, store, sample_input):
        first = store.save("first", sample_input)
        store.save("second", sample_input)
        store.update(first.id, name="first renamed")

        summaries = store.list_all()

        assert summaries[0].id == first.id
        assert summaries[0].name == "first renamed"

    def test_list_empty(self, store):
        assert store.list_all() == []

    def test_list_skips_corrupt_files(self, store, sample_input):
        store.save("good", sample_input)
        (store.directory / "broken1.json").write_text("{not json")

        summaries = store.list_all()

        assert [s.name for s in summaries] == ["good"]

    def test_update_input(self, store, sample_input):
        scheme = store.save("offer", sample_input)
        new_input = sample_input.model_copy(update={"monthly_salary": 35000})

        updated = store.update(scheme.id, tax_input=new_input)

        assert updated.name == "offer"
        assert updated.created_at == scheme.created_at
        assert store.load(scheme.id).monthly_salary == 35000

    def test_update_missing_raises(self, store):
        with pytest.raises(SchemeNotFoundError):
            store.update("deadbeef", name="x")

    def test_delete(self, store, sample_input):
        scheme = store.save("offer", sample_input)

        assert store.delete(scheme.id) is True
        assert store.load(scheme.id) is None
        assert store.delete(scheme.id) is False

    def test_empty_name_rejected(self, store, sample_input):
        with pytest.raises(ValueError):
            store.save("  ", sample_input)


class TestSchemeIds:
    """Only 8-char hex IDs address files, and only inside the store directory."""

    @pytest.fixture
    def outside_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"data_dir": str(tmp_path)}))
        return path

    def test_delete_cannot_leave_store(self, tmp_path, outside_file):
        store = SchemeStore(tmp_path / "data" / "schemes")

        assert store.delete("../../settings") is False
        assert outside_file.exists()

    def test_get_cannot_leave_store(self, tmp_path, outside_file):
        store = SchemeStore(tmp_path / "data" / "schemes")

        assert store.get("../../settings") is None
        assert store.load("../../settings") is None

    def test_update_invalid_id_not_found(self, store):
        with pytest.raises(SchemeNotFoundError):
            store.update("../offer", name="x")

    @pytest.mark.parametrize("scheme_id", ["", "DEADBEEF", "deadbee", "deadbeef0", "dead/eef"])
    def test_malformed_ids_rejected(self, store, scheme_id):
        assert store.get(scheme_id) is None
        assert store.delete(scheme_id) is False


class TestDefaultLocation:
    """Default store lives under the configured data directory."""

    def test_uses_data_dir(self, isolated_env, sample_input):
        scheme = SchemeStore().save("offer", sample_input)

        assert get_schemes_dir() == isolated_env["data_dir"] / "schemes"
        assert (isolated_env["data_dir"] / "schemes" / f"{scheme.id}.json").exists()
