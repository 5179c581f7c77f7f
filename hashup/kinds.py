import enum

__all__ = ["AlgorithmKind"]


class AlgorithmKind(str, enum.Enum):
    PBKDF2 = "pbkdf2"
    COMPRESSED_PBKDF2 = "compressed-pbkdf2"
    BCRYPT = "bcrypt"
    SCRYPT = "scrypt"
    MESSAGE_DIGEST = "message-digest"
