# binary layout of a serialized multihash, all fields big-endian:
# size (u64), entry count (u8), then per entry: algorithm code (u8) + digest (fixed size per algorithm)
MULTIHASH_HEADER_FMT = ">QB"

# the size is stored as an unsigned 64bit integer
MAX_DATA_SIZE = 2**64 - 1

# read buffer size used when hashing from a stream
BUFSIZE = 1024 * 1024

# environment variables
PROVIDERS_ENV_VAR = "MULTIHASH_PROVIDERS"
LOGGING_CONF_ENV_VAR = "MULTIHASH_LOGGING_CONF"

# default digest provider chain, in order of preference
DEFAULT_PROVIDERS = "hashlib,pycryptodome"
