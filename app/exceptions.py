# -*- coding: utf-8 -*-


class AnalyticsError(Exception):
    """Base class for errors raised by the geospatial analytics engine."""


class EmptyInputError(AnalyticsError):
    """None of the given reports has a usable location."""


class InvalidParameterError(AnalyticsError):
    """The clustering parameters are out of range."""
