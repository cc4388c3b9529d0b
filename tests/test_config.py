"""
Unit tests for SliceConfig and TimingLog.
"""

import json

import pytest

from slicemaster.config import DEFAULT_SPLIT_Y2, SPLIT_Y1, SliceConfig
from slicemaster.timing import TimingLog, timed_phase


class TestSliceConfig:
    """Tests for SliceConfig dataclass."""

    def test_defaults(self):
        config = SliceConfig()

        assert config.split_y2 == DEFAULT_SPLIT_Y2 == 800
        assert config.split_y1 == SPLIT_Y1 == 640
        assert config.middle_height == 160

    def test_with_middle_height(self):
        assert SliceConfig.with_middle_height(200).split_y2 == 840

    def test_split_below_split_y1_allowed(self):
        """m_3 is simply omitted; the config itself is valid."""
        assert SliceConfig(split_y2=500).middle_height == -140

    def test_init_when_negative_split_then_raises_error(self):
        with pytest.raises(ValueError, match="split_y2 must be non-negative"):
            SliceConfig(split_y2=-1)

    @pytest.mark.parametrize("split_y2", [800.5, "800", None, False])
    def test_init_when_non_int_split_then_raises_error(self, split_y2):
        with pytest.raises(TypeError, match="split_y2 must be an integer"):
            SliceConfig(split_y2=split_y2)

    def test_init_when_negative_workers_then_raises_error(self):
        with pytest.raises(ValueError, match="encode_workers"):
            SliceConfig(encode_workers=-2)

    @pytest.mark.parametrize("level", [-1, 10])
    def test_init_when_bad_compress_level_then_raises_error(self, level):
        with pytest.raises(ValueError, match="png_compress_level"):
            SliceConfig(png_compress_level=level)


class TestTimingLog:

    def test_timed_phase_records_run_phase(self):
        log = TimingLog()

        with timed_phase(log, "resize"):
            pass

        assert "resize" in log.run_timings
        assert log.total >= 0.0

    def test_timed_phase_records_region_phase(self):
        log = TimingLog()

        with timed_phase(log, "encode", region="m_4"):
            pass

        assert list(log.region_timings) == ["m_4"]
        assert log.get_slowest_regions(1)[0][0] == "m_4"

    def test_timed_phase_without_log_is_noop(self):
        with timed_phase(None, "resize"):
            pass

    def test_summary_lists_phases(self):
        log = TimingLog()
        log.log_run("extract", 0.25)
        log.log_region("m_1", "encode", 0.125)

        summary = log.summary()

        assert "extract" in summary
        assert "m_1: 0.125s" in summary

    def test_save_writes_json(self, tmp_path):
        log = TimingLog()
        log.log_run("load", 1.5)
        path = tmp_path / "timing.json"

        log.save(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["run_timings"] == {"load": 1.5}
        assert data["total"] == 1.5
