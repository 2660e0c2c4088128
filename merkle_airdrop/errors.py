class AirdropError(Exception):
    code = "AIRDROP_ERROR"
    message = "Airdrop error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class InvalidAddress(AirdropError, ValueError):
    code = "INVALID_ADDRESS"
    message = "Invalid address"


class InvalidRoot(AirdropError, ValueError):
    code = "INVALID_ROOT"
    message = "Merkle root must be 32 bytes"


class EmptyWhitelist(AirdropError):
    code = "EMPTY_WHITELIST"
    message = "Whitelist is empty"


class LeafNotFound(AirdropError):
    code = "LEAF_NOT_FOUND"
    message = "Leaf is not in tree"


class MalformedProof(AirdropError):
    code = "MALFORMED_PROOF"
    message = "Malformed proof"


class NotWhitelisted(AirdropError):
    code = "NOT_WHITELISTED"
    message = "Address is not whitelisted"


class AlreadyClaimed(AirdropError):
    code = "ALREADY_CLAIMED"
    message = "Address has already claimed"


class Unauthorized(AirdropError):
    code = "UNAUTHORIZED"
    message = "Caller is not authorized"
