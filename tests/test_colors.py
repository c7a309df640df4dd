"""Tests for brain_train.ui.colors – color blending and palette constants."""

from __future__ import annotations

import pytest

from brain_train.ui.colors import TIMER_BUCKET_COLORS, GameColors, blend_hex


# ===========================================================================
# GameColors / timer buckets
# ===========================================================================

class TestGameColors:
    @pytest.mark.parametrize(
        "name",
        ["CELL", "CELL_SAFE", "CELL_WRONG", "CELL_BLINK", "CELL_ACTIVE_BORDER", "BG_BOTTOM"],
    )
    def test_cell_colors_are_hex(self, name: str):
        value = getattr(GameColors, name)
        assert value.startswith("#")
        assert len(value) == 7

    def test_every_timer_bucket_has_color(self):
        assert set(TIMER_BUCKET_COLORS) == {"ok", "warn", "danger"}


# ===========================================================================
# blend_hex
# ===========================================================================

class TestBlendHex:
    def test_t_zero_returns_a(self):
        assert blend_hex("#FF0000", "#0000FF", 0.0) == "#FF0000"

    def test_t_one_returns_b(self):
        assert blend_hex("#FF0000", "#0000FF", 1.0) == "#0000FF"

    def test_midpoint(self):
        result = blend_hex("#000000", "#FFFFFF", 0.5)
        assert 126 <= int(result[1:3], 16) <= 128

    def test_clamps_t(self):
        assert blend_hex("#FF0000", "#0000FF", -1.0) == "#FF0000"
        assert blend_hex("#FF0000", "#0000FF", 2.0) == "#0000FF"

    def test_blink_glow_blend(self):
        # the grid draws the blink border as CELL_BLINK lightened by 40%
        glow = blend_hex(GameColors.CELL_BLINK, "#FFFFFF", 0.4)
        assert glow.startswith("#") and len(glow) == 7
        assert glow != GameColors.CELL_BLINK.upper()


# ===========================================================================
# blend_hex – invalid inputs
# ===========================================================================

class TestBlendHexInvalid:
    def test_missing_hash(self):
        assert blend_hex("FF0000", "#0000FF", 0.5) == "FF0000"

    def test_wrong_length(self):
        assert blend_hex("#FFF", "#000000", 0.5) == "#FFF"

    def test_invalid_hex_chars(self):
        assert blend_hex("#GGHHII", "#000000", 0.5) == "#GGHHII"

    def test_empty_strings(self):
        assert blend_hex("", "", 0.5) == ""
