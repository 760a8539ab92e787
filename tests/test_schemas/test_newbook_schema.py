from price_checker.schemas.newbook import RawTariffOffer, TariffStatus, parse_availability


def test_success_marker_only_literal_true():
    assert RawTariffOffer(tariff_success="true").tariff_success is TariffStatus.success
    assert RawTariffOffer(tariff_success="TRUE").tariff_success is TariffStatus.failed
    assert RawTariffOffer(tariff_success=True).tariff_success is TariffStatus.failed
    assert RawTariffOffer(tariff_success="false").succeeded is False
    assert RawTariffOffer().succeeded is False


def test_numeric_fields_coerced():
    offer = RawTariffOffer(tariff_total="149.90", tariff_min_nights="3")

    assert offer.tariff_total == 149.90
    assert offer.tariff_min_nights == 3


def test_bad_numbers_become_zero():
    offer = RawTariffOffer(tariff_total={"amount": 5}, tariff_min_nights="two")

    assert offer.tariff_total == 0.0
    assert offer.tariff_min_nights == 0


def test_free_text_shapes_kept():
    offer = RawTariffOffer(
        tariff_message=["a", "b"],
        tariff_inclusions={"name": "Breakfast"},
        tariff_short_description=42,
    )

    assert offer.tariff_message == ["a", "b"]
    assert offer.tariff_inclusions == {"name": "Breakfast"}
    assert offer.tariff_short_description == "42"


def test_extra_keys_retained():
    offer = RawTariffOffer(tariff_label="Flex", tariff_amenities=["WiFi"])

    assert offer.extras == {"tariff_amenities": ["WiFi"]}


def test_parse_availability_rejects_missing_envelope():
    assert parse_availability(None) is None
    assert parse_availability({"success": "false"}) is None
    assert parse_availability({"error": "Invalid api key", "data": []}) is None
    assert parse_availability({"data": 5}) is None


def test_parse_availability_accepts_keyed_categories():
    parsed = parse_availability({
        "data": {
            "12": {"category_name": "Pitch", "sites_available": "2", "tariffs_available": []},
        }
    })

    assert parsed is not None
    assert parsed.data[0].category_name == "Pitch"
    assert parsed.data[0].sites_available == 2


def test_parse_availability_null_error_is_not_an_error():
    parsed = parse_availability({"error": None, "data": []})

    assert parsed is not None
    assert parsed.data == []
