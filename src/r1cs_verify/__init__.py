"""R1CS Verify - container decoding and structural checks."""
