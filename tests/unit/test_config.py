"""Unit tests for configuration models."""

import pytest

from kumiko.config import (
    MIN_LENGTH_MM,
    CuttingParams,
    ExportConfig,
    ExportPass,
    KumikoSettings,
    LoggingConfig,
    NotchStyle,
    get_default_settings,
    parse_params,
)
from kumiko.exceptions import ParameterError


class TestCuttingParams:
    """Tests for CuttingParams."""

    def test_defaults(self) -> None:
        params = CuttingParams()
        assert params.bit_size == pytest.approx(6.35)
        assert params.cut_depth == pytest.approx(19.0)
        assert params.notch_depth == pytest.approx(9.5)
        assert params.grid_unit_mm == pytest.approx(30.0)

    def test_camel_case_keys(self) -> None:
        params = parse_params({"bitSize": 3.0, "stockLength": 400, "gridDivisions": 20})
        assert params.bit_size == pytest.approx(3.0)
        assert params.grid_unit_mm == pytest.approx(20.0)

    def test_snake_case_keys(self) -> None:
        assert parse_params({"cut_depth": 12}).notch_depth == pytest.approx(6.0)

    def test_explicit_half_depth_kept(self) -> None:
        assert parse_params({"cutDepth": 12, "halfCutDepth": 4}).notch_depth == pytest.approx(4.0)

    @pytest.mark.parametrize("field", ["bitSize", "cutDepth", "gridCellSize", "stockLength"])
    def test_non_positive_lengths_clamped(self, field: str) -> None:
        params = parse_params({field: -5})
        assert params.to_document()[field] == pytest.approx(MIN_LENGTH_MM)

    def test_divisions_clamped(self) -> None:
        assert parse_params({"gridDivisions": 0}).grid_divisions == 1

    def test_fractional_divisions_rejected(self) -> None:
        with pytest.raises(ParameterError):
            parse_params({"gridDivisions": 2.5})

    @pytest.mark.parametrize("value", ["abc", None, True, float("nan"), [1]])
    def test_non_numbers_rejected(self, value: object) -> None:
        with pytest.raises(ParameterError):
            parse_params({"bitSize": value})

    def test_to_document(self) -> None:
        data = CuttingParams().to_document()
        assert set(data) == {
            "bitSize",
            "cutDepth",
            "halfCutDepth",
            "gridCellSize",
            "stockLength",
            "gridDivisions",
        }
        assert data["halfCutDepth"] == pytest.approx(9.5)


class TestSettings:
    """Tests for the settings tree."""

    def test_defaults(self) -> None:
        settings = get_default_settings()
        assert isinstance(settings, KumikoSettings)
        assert settings.strips.notch_style is NotchStyle.UNDER_ONLY
        assert settings.export.margin == pytest.approx(50.0)
        assert settings.export.export_pass is ExportPass.ALL
        assert not settings.export.account_for_rotation

    def test_export_config_validation(self) -> None:
        with pytest.raises(ValueError):
            ExportConfig(margin=-1.0)

    def test_enum_from_string(self) -> None:
        assert ExportConfig(export_pass="bottom").export_pass is ExportPass.BOTTOM

    def test_log_level_normalized(self) -> None:
        assert LoggingConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ValueError):
            LoggingConfig(log_level="chatty")
