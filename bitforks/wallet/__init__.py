"""
All classes and methods which have to do with HD wallet keys and addresses
"""
# wallet/__init__.py
from bitforks.wallet.address import *
from bitforks.wallet.derivation import *
from bitforks.wallet.keys import *
from bitforks.wallet.mnemonic import *
from bitforks.wallet.xkeys import *
