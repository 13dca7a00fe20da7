"""R1CS container protocol constants.

Single source of truth for on-disk magic values and record layouts.
Keep this file stable. The reader and the test builder must remain synchronized.
"""

# File magic
MAGIC = b"r1cs"

VERSION = 1

# Preamble: [Magic(4) | Ver(4) | NSections(4)] = 12 bytes
PREAMBLE_FMT = "<4sII"

# Section table entry: [Type(4) | Size(8)] = 12 bytes
SECTION_ENTRY_FMT = "<IQ"
SECTION_ENTRY_LEN = 12

# Section types
SECTION_HEADER = 1
SECTION_CONSTRAINTS = 2
SECTION_WIRE2LABEL = 3

SECTION_NAMES = {
    SECTION_HEADER: "header",
    SECTION_CONSTRAINTS: "constraints",
    SECTION_WIRE2LABEL: "wire2label",
}

# Header, after the variable-width prime:
# [NWires(4) | NPubOut(4) | NPubIn(4) | NPrvIn(4) | NLabels(8) | MConstraints(4)] = 28 bytes
HEADER_COUNTS_FMT = "<IIIIQI"
HEADER_COUNTS_LEN = 28
# field_size(4) + counts(28); the prime adds field_size bytes on top.
HEADER_FIXED_LEN = 4 + HEADER_COUNTS_LEN

# Wire-to-label entries are u64
LABEL_LEN = 8

# Wire 0 always carries the constant 1
CONSTANT_WIRE = 0
