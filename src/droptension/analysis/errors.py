class MeasurementFailure(Exception):
    """
    Base class for every reason the measurement pipeline can stop.

    The message is meant for diagnostics and tests; hosts that only need a
    short end-user text use MeasurementResult.summary() instead.
    """

    reason = "measurement failed"

    def __init__(self, message: str = None):
        super().__init__(message or self.reason)


class InsufficientPoints(MeasurementFailure):
    reason = "not enough contour points"


class DegenerateShape(MeasurementFailure):
    reason = "contour shape failed the geometric checks"


class MissingCalibration(MeasurementFailure):
    reason = "no valid reference diameter given"


class InsufficientCalibrationBand(MeasurementFailure):
    reason = "reference band has too little signal"


class DegenerateCircleFit(MeasurementFailure):
    reason = "apex points do not define a stable circle"


class InvalidScaleFactor(MeasurementFailure):
    reason = "scale factor is not a positive finite number"
