"""
crypto folder used to house the hash functions and the injected elliptic curve provider
"""

# crypto/__init__.py
from bitforks.crypto.hash_functions import *
from bitforks.crypto.provider import *
