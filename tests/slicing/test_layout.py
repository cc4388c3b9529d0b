"""
Tests for slicing.layout

Test Coverage:
- plan_regions(): Top band, m_3 and m_4 geometry
- Boundary cases: short sources, split_y2 below split_y1, split_y2 past the end
- Deterministic name ordering
"""
import pytest

from slicemaster.config import BOTTOM_HEIGHT, BOTTOM_WIDTH, DEFAULT_SPLIT_Y2, SPLIT_Y1
from slicemaster.slicing.layout import plan_regions

TOP_NAMES = {"m_1", "m_2", "m_5", "m_6"}


class TestTopBand:
    """Tests for m_1, m_2, m_5, m_6."""

    @pytest.mark.parametrize("height", [640, 641, 900, 5000])
    def test_top_band_when_tall_source_then_640_high(self, height):
        """Sources at least 640 high get four 640 px top regions."""
        layout = plan_regions(height, DEFAULT_SPLIT_Y2)

        top = [r for r in layout.regions if r.name in TOP_NAMES]
        assert len(top) == 4
        assert all(r.height == SPLIT_Y1 for r in top)

    @pytest.mark.parametrize("height", [1, 100, 639])
    def test_top_band_when_short_source_then_matches_source_height(self, height):
        """Sources shorter than 640 get top regions as tall as the source."""
        layout = plan_regions(height, DEFAULT_SPLIT_Y2)

        top = [r for r in layout.regions if r.name in TOP_NAMES]
        assert len(top) == 4
        assert all(r.height == height for r in top)

    def test_top_band_when_zero_height_then_omitted(self):
        """A zero-row source produces no top band regions."""
        layout = plan_regions(0, DEFAULT_SPLIT_Y2)

        assert not any(r.name in TOP_NAMES for r in layout.regions)
        assert layout.names == ("m_4",)

    def test_top_band_columns(self):
        """Columns are m_5 | m_1 | m_2 | m_6 across the 640 px width."""
        layout = plan_regions(640, DEFAULT_SPLIT_Y2)

        assert layout.get("m_5").box == (0, 0, 80, 640)
        assert layout.get("m_1").box == (80, 0, 320, 640)
        assert layout.get("m_2").box == (320, 0, 560, 640)
        assert layout.get("m_6").box == (560, 0, 640, 640)

    def test_top_band_columns_tile_full_width(self):
        """Top columns cover every x exactly once."""
        layout = plan_regions(700, DEFAULT_SPLIT_Y2)
        top = sorted(
            (r for r in layout.regions if r.name in TOP_NAMES), key=lambda r: r.x
        )

        edges = [(r.x, r.right) for r in top]
        assert edges == [(0, 80), (80, 320), (320, 560), (560, 640)]


class TestMiddleBand:
    """Tests for m_3."""

    def test_middle_when_source_covers_split_then_full_height(self):
        """m_3 spans 640..split_y2 when the source reaches split_y2."""
        layout = plan_regions(900, 800)

        m3 = layout.get("m_3")
        assert (m3.x, m3.y, m3.width, m3.height) == (0, 640, 640, 160)

    def test_middle_when_source_ends_inside_band_then_shortened(self):
        """m_3 stops at the end of the source."""
        layout = plan_regions(700, 800)

        assert layout.get("m_3").height == 60

    def test_middle_when_source_ends_at_split_y1_then_omitted(self):
        """640 px source leaves no rows for m_3."""
        layout = plan_regions(640, 800)

        assert "m_3" not in layout.names

    def test_middle_when_split_y2_equals_split_y1_then_omitted(self):
        """split_y2 == 640 gives m_3 zero rows."""
        layout = plan_regions(2000, 640)

        assert "m_3" not in layout.names

    def test_middle_when_split_y2_below_split_y1_then_omitted(self):
        """Negative middle height clamps to nothing."""
        layout = plan_regions(2000, 500)

        assert "m_3" not in layout.names
        assert all(not r.is_empty for r in layout.regions)


class TestBottomRegion:
    """Tests for m_4."""

    @pytest.mark.parametrize("height", [0, 1, 639, 640, 800, 900, 1280, 4000])
    def test_bottom_always_fixed_size(self, height):
        """m_4 is 640x480 for every source height."""
        layout = plan_regions(height, DEFAULT_SPLIT_Y2)

        m4 = layout.get("m_4")
        assert m4.size == (BOTTOM_WIDTH, BOTTOM_HEIGHT)

    def test_bottom_when_partial_source_then_padded(self):
        """100 rows below split_y2 fill the top of m_4, 380 rows pad."""
        layout = plan_regions(900, 800)

        assert layout.bottom.y == 800
        assert layout.bottom_fill == 100
        assert layout.bottom_padding == 380

    def test_bottom_when_excess_source_then_capped_at_480(self):
        """Rows past split_y2 + 480 are ignored."""
        layout = plan_regions(3000, 800)

        assert layout.bottom_fill == 480
        assert layout.bottom_padding == 0

    def test_bottom_when_split_y2_past_source_then_starts_at_source_end(self):
        """bot_start clamps to the source height, m_4 is fully blank."""
        layout = plan_regions(700, 1000)

        assert layout.bottom.y == 700
        assert layout.bottom_fill == 0

    def test_bottom_when_split_y2_below_split_y1_then_starts_at_split_y2(self):
        """bot_start follows split_y2 even when it is inside the top band."""
        layout = plan_regions(2000, 500)

        assert layout.bottom.y == 500
        assert layout.bottom_fill == 480

    def test_bottom_when_short_source_then_fully_blank(self):
        """Source shorter than 640 leaves nothing for m_4."""
        layout = plan_regions(300, DEFAULT_SPLIT_Y2)

        assert layout.bottom.y == 300
        assert layout.bottom_fill == 0
        assert layout.bottom_padding == BOTTOM_HEIGHT


class TestScenarios:
    """End-to-end geometry scenarios."""

    def test_scenario_square_source(self):
        """640x640: full top band, no m_3, blank m_4 at y=640."""
        layout = plan_regions(640, 800)

        assert layout.names == ("m_1", "m_2", "m_4", "m_5", "m_6")
        assert layout.get("m_1").size == (240, 640)
        assert layout.get("m_2").size == (240, 640)
        assert layout.get("m_5").size == (80, 640)
        assert layout.get("m_6").size == (80, 640)
        assert layout.bottom.y == 640
        assert layout.bottom_fill == 0

    def test_scenario_900_high(self):
        """640x900: m_3 160 high, m_4 with 100 rows of content."""
        layout = plan_regions(900, 800)

        assert layout.names == ("m_1", "m_2", "m_3", "m_4", "m_5", "m_6")
        assert layout.get("m_3").height == 160
        assert layout.bottom.y == 800
        assert layout.bottom_fill == 100

    def test_scenario_split_at_split_y1(self):
        """split_y2 == 640: m_3 omitted, m_4 starts at 640."""
        layout = plan_regions(1500, 640)

        assert "m_3" not in layout.names
        assert layout.bottom.y == 640
        assert layout.bottom_fill == 480


class TestPlanRegionsContract:

    def test_regions_sorted_by_filename(self):
        layout = plan_regions(1500, 800)

        filenames = [r.filename for r in layout.regions]
        assert filenames == sorted(filenames)

    def test_plan_is_deterministic(self):
        assert plan_regions(1234, 900) == plan_regions(1234, 900)

    def test_get_when_missing_then_raises_key_error(self):
        layout = plan_regions(640, 800)

        with pytest.raises(KeyError, match="m_3"):
            layout.get("m_3")

    def test_negative_height_raises(self):
        with pytest.raises(ValueError, match="source_height"):
            plan_regions(-1, 800)

    def test_negative_split_raises(self):
        with pytest.raises(ValueError, match="split_y2"):
            plan_regions(800, -5)

    @pytest.mark.parametrize("split_y2", [800.5, 800.0, "800", True])
    def test_non_int_split_raises(self, split_y2):
        with pytest.raises(TypeError, match="split_y2 must be an integer"):
            plan_regions(900, split_y2)

    def test_non_int_height_raises(self):
        with pytest.raises(TypeError, match="source_height"):
            plan_regions(900.0, 800)
