ERRORS = {
  "E_BAD_MAGIC": "Container does not start with the r1cs magic",
  "E_VERSION": "Container version not supported",
  "E_TRUNCATED": "Container ends before a declared structure is complete",
  "E_SECTION_MISMATCH": "Declared section sizes disagree with the container length",
  "E_SECTION_MISSING": "Required section missing",
  "E_HEADER_SIZE": "Header section size does not match the field size",
  "E_SECTION_SIZE": "Section size does not match its declared contents",
  "E_WIRE_MAP": "Wire-to-label map invalid",
  "E_COEFF_RANGE": "Coefficient not reduced modulo the prime",
  "E_WIRE_RANGE": "Wire index beyond the declared wire count",
  "E_SECURITY_LEVEL": "Security level not supported",
  "E_CONSTRAINT_ESTIMATE": "Constraint count differs from the closed-form estimate",
}
