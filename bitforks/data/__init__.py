"""
All methods for encoding and representing data in bitforks
"""

# data/__init__.py
from bitforks.data.encoding import *
from bitforks.data.wordlist import *
