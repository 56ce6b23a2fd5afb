from .shares import Share, ShareSet
from .lagrange import LagrangeReconstructor, interpolate_at_zero
from .voting import ConsistencyVoter, RecoveryResult, recover_secret
from .loader import load_share_set, parse_share_set
from .errors import (
    SecretFinderError,
    DecodeError,
    DuplicateShareError,
    InvalidThreshold,
    InsufficientShares,
    InconsistentCombination,
    NoValidSecret,
    TooManyCombinations,
)
