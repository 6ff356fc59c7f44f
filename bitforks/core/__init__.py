"""
Contains the core elements that are used within bitforks

Core:
    -Provides the reference formats and constants
    -Provides custom exceptions for the various bitforks elements
    -Provides environment configuration and the logger factory
"""
# core/__init__.py
from bitforks.core.exceptions import *
from bitforks.core.formats import *
from bitforks.core.logging import *
