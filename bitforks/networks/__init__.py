"""
Network parameters and the registry of supported forks
"""
# networks/__init__.py
from bitforks.networks.definitions import *
from bitforks.networks.params import *
from bitforks.networks.registry import *
