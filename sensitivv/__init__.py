# -*- coding: utf-8 -*-
"""Sensitivv — product sensitivity test tracker (server + device client)."""

__version__ = "1.0.0"
