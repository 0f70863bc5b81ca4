from .main import *
from .primitives import BASES, BASE_ALIASES, CIPHERS, CipherSpec
from .version import __version__

def encrypt(value, base=10, *, master_key, password, iv=None, min_value=None, max_value=None, rounds=None, cipher=None, pad: bool = False, max_walk=None):
    return fwxfpe.encrypt(value, base, master_key=master_key, password=password, iv=iv, min_value=min_value, max_value=max_value, rounds=rounds, cipher=cipher, pad=pad, max_walk=max_walk)
def decrypt(value, base=10, *, master_key, password, iv=None, min_value=None, max_value=None, rounds=None, cipher=None, pad: bool = False, max_walk=None):
    return fwxfpe.decrypt(value, base, master_key=master_key, password=password, iv=iv, min_value=min_value, max_value=max_value, rounds=rounds, cipher=cipher, pad=pad, max_walk=max_walk)

def derive_schedule(key: KeyMaterial, rounds: int, cipher, side_size: int): return fwxfpe.derive_schedule(key, rounds, cipher, side_size)
def size_domain(max_value, block_bits: int = 128): return fwxfpe.size_domain(max_value, block_bits)

Context = fwxfpe.Context
