# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Introspector implementations for the Java class scanner."""

from jcs.introspectors.classfile import ClassFileIntrospector

__all__ = ["ClassFileIntrospector"]
