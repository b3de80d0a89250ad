#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Evaluation utilities for the dietary classifier.
"""

from .metrics import pack, table

__all__ = ['pack', 'table']
