"""Error taxonomy shared by the decoder, the estimator and the compiler boundary."""
from __future__ import annotations


class R1CSError(Exception):
    """Root of every error raised by this project."""

    code = "E_R1CS"


class FormatError(R1CSError, ValueError):
    """The container bytes do not follow the R1CS layout."""

    code = "E_FORMAT"


class BadMagic(FormatError):
    code = "E_BAD_MAGIC"

    def __init__(self, found: bytes):
        self.found = bytes(found)
        super().__init__(f"Invalid magic number {self.found!r}")


class Truncated(FormatError):
    code = "E_TRUNCATED"

    def __init__(self, offset: int, needed: int, available: int, what: str = "bytes"):
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"Truncated reading {what} at offset {offset}: need {needed}, have {available}"
        )


class SectionCountMismatch(FormatError):
    """Declared section sizes disagree with the bytes they cover."""

    code = "E_SECTION_MISMATCH"


class UnsupportedVersion(FormatError):
    code = "E_VERSION"

    def __init__(self, version: int):
        self.version = version
        super().__init__(f"Unsupported version {version}")


class MissingSection(FormatError):
    code = "E_SECTION_MISSING"

    def __init__(self, section_type: int, name: str):
        self.section_type = section_type
        super().__init__(f"Required {name} section (type {section_type}) missing")


class HeaderSizeMismatch(FormatError):
    code = "E_HEADER_SIZE"


class SectionSizeMismatch(FormatError):
    code = "E_SECTION_SIZE"


class BadWireMap(FormatError):
    code = "E_WIRE_MAP"


class CoefficientOutOfRange(FormatError):
    code = "E_COEFF_RANGE"


class WireOutOfRange(FormatError):
    code = "E_WIRE_RANGE"


class ParameterError(R1CSError, ValueError):
    code = "E_PARAMETER"


class UnsupportedSecurityLevel(ParameterError):
    code = "E_SECURITY_LEVEL"

    def __init__(self, level):
        self.level = level
        super().__init__(f"Unsupported security level {level!r}")


class ConstraintCountMismatch(ParameterError):
    code = "E_CONSTRAINT_ESTIMATE"

    def __init__(self, level: int, expected: int, declared: int):
        self.level = level
        self.expected = expected
        self.declared = declared
        super().__init__(
            f"Constraint count {declared} differs from estimate {expected} for level {level}"
        )


class ExternalProcessError(R1CSError, RuntimeError):
    code = "E_EXTERNAL"


class CompilerNotFound(ExternalProcessError):
    code = "E_COMPILER_MISSING"

    def __init__(self, binary: str):
        self.binary = binary
        super().__init__(
            f"Failed to execute {binary}. Is circom installed and in your PATH?"
        )


class CompilationFailed(ExternalProcessError):
    code = "E_COMPILE"

    def __init__(self, returncode: int, stderr: str):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Circom compilation failed (exit {returncode})")
