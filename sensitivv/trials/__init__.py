# -*- coding: utf-8 -*-
"""Sensitivity trials ("tests"): a timed per-item trial with an outcome.

none -> active (completed = false) -> completed (completed = true)
"""
