# every error is a ValueError so callers that only know about bad input can still catch it


class SecretFinderError(ValueError):
    pass


class DecodeError(SecretFinderError):
    """A share value could not be turned into an integer."""
    def __init__(self, message, identifier=None):
        self.identifier = identifier
        if identifier is not None:
            message = f"share {identifier}: {message}"
        super().__init__(message)


class DuplicateShareError(SecretFinderError):
    pass


class InvalidThreshold(SecretFinderError):
    def __init__(self, threshold):
        self.threshold = threshold
        super().__init__(f"threshold (k = {threshold}) must be at least 2")


class InsufficientShares(SecretFinderError):
    def __init__(self, have: int, need: int):
        self.have = have
        self.need = need
        super().__init__(f"Not enough shares to reconstruct secret. (have {have}/{need} shares)")


# raised per combination and absorbed by the voter, never surfaced to the caller
class InconsistentCombination(SecretFinderError):
    pass


class NoValidSecret(SecretFinderError):
    def __init__(self, combinations_tried: int):
        self.combinations_tried = combinations_tried
        super().__init__(f"Could not reconstruct a valid secret from any combination ({combinations_tried} tried)")


class TooManyCombinations(SecretFinderError):
    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"{count} combinations exceeds the configured limit of {limit}")
