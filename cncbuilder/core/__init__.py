#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CncBuilder Core Module
======================
Shared components for every cncbuilder module.
"""

from cncbuilder.core.exceptions import (
    CncBuilderError,
    ValidationError,
    InvalidFieldValueError,
    InvalidCutParametersError,
    NestingError,
    UnknownNestingMethodError,
    ConfigurationError,
)

__all__ = [
    'CncBuilderError',
    'ValidationError',
    'InvalidFieldValueError',
    'InvalidCutParametersError',
    'NestingError',
    'UnknownNestingMethodError',
    'ConfigurationError',
]
