from s2sgeo.step_detector import StepDetector


def test_threshold_is_strict():
    detector = StepDetector()
    assert detector.detect_step(1.5, 1.0) is False


def test_minimum_interval_is_strict():
    detector = StepDetector()
    assert detector.detect_step(2.0, 0.3) is False


def test_rising_peak_after_interval_is_a_step():
    detector = StepDetector()
    assert detector.detect_step(2.0, 1.0) is True


def test_below_threshold_is_not_a_step():
    detector = StepDetector()
    assert detector.detect_step(1.0, 1.0) is False


def test_peak_within_minimum_interval_is_ignored():
    detector = StepDetector()
    assert detector.detect_step(2.0, 1.0) is True
    assert detector.detect_step(2.0, 1.1) is False


def test_sustained_high_acceleration_is_not_a_new_step():
    detector = StepDetector()
    assert detector.detect_step(2.0, 0.1) is False
    assert detector.detect_step(2.0, 0.5) is False


def test_falling_then_rising_gives_another_step():
    detector = StepDetector()
    assert detector.detect_step(2.0, 1.0) is True
    assert detector.detect_step(0.0, 1.2) is False
    assert detector.detect_step(2.0, 1.5) is True