"""
The currency plugin: static info, host io, the shared cache, URI codec, tools and engine factories
"""
# plugin/__init__.py
from bitforks.plugin.engine import *
from bitforks.plugin.factory import *
from bitforks.plugin.info import *
from bitforks.plugin.io import *
from bitforks.plugin.state import *
from bitforks.plugin.tools import *
from bitforks.plugin.uri import *
