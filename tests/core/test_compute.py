"""
Tests for timing and device selection.
"""

import pytest

from mcmle.core.compute.device import DeviceInfo, get_cpu_info, select_device
from mcmle.core.compute.timing import Timer


class TestTimer:

    def test_sections_recorded(self):
        timer = Timer()
        timer.start()
        with timer.section('draws'):
            pass
        with timer.section('draws'):
            pass
        timer.stop()
        result = timer.result()
        assert result['total_seconds'] >= 0.0
        assert result['draws'] >= 0.0
        assert set(result) == {'total_seconds', 'draws'}

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError):
            Timer().stop()


class TestDevice:

    def test_cpu_always_available(self):
        device = select_device('cpu')
        assert device.device_type == 'cpu'
        assert not device.is_gpu

    def test_cpu_info_str(self):
        assert str(get_cpu_info()).startswith("CPU (")

    def test_gpu_flag(self):
        assert DeviceInfo('cuda', 0, 'Fake').is_gpu
        assert str(DeviceInfo('cuda', 0, 'Fake')) == "CUDA:0 (Fake)"

    def test_gpu_request_without_gpu(self, monkeypatch):
        monkeypatch.setattr('mcmle.core.compute.device.detect_gpu', lambda: None)
        with pytest.raises(RuntimeError, match="GPU requested"):
            select_device('gpu')

    def test_auto_without_gpu(self, monkeypatch):
        monkeypatch.setattr('mcmle.core.compute.device.detect_gpu', lambda: None)
        assert select_device('auto').device_type == 'cpu'
