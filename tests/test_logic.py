from r1cs_verify.logic import verify_container, verify_file

from r1cs_builder import SAMPLE_CONSTRAINTS, SMALL_PRIME, r1cs_bytes


def test_pass_report():
    data = r1cs_bytes(SAMPLE_CONSTRAINTS, wire_map=[0, 1, 2, 3])
    result = verify_container(data)
    assert result["status"] == "PASS"
    assert result["error_count"] == 0
    assert result["decoded_constraints"] == 2
    assert result["header"]["n_constraints"] == 2
    assert [s["name"] for s in result["sections"]] == ["header", "constraints", "wire2label"]
    assert len(result["sha256"]) == 64


def test_bad_magic_report():
    result = verify_container(b"nope" + r1cs_bytes([])[4:])
    assert result["status"] == "FAIL"
    assert result["errors"][0]["code"] == "E_BAD_MAGIC"
    assert "header" not in result


def test_truncated_report():
    data = r1cs_bytes(SAMPLE_CONSTRAINTS)
    result = verify_container(data[:-3])
    assert result["status"] == "FAIL"
    assert result["errors"][0]["code"] == "E_TRUNCATED"


def test_bad_constraint_is_located():
    constraints = [([(0, 1)], [(1, 1)], [(1, 1)]), ([(1, SMALL_PRIME + 1)], [], [])]
    data = r1cs_bytes(constraints, prime=SMALL_PRIME, field_size=4)
    result = verify_container(data)
    assert result["status"] == "FAIL"
    assert result["errors"][0]["code"] == "E_COEFF_RANGE"
    assert result["errors"][0]["constraint"] == 1


def test_strict_wires_report():
    data = r1cs_bytes([([(17, 1)], [(1, 1)], [(1, 1)])], n_wires=4)
    assert verify_container(data)["status"] == "PASS"
    result = verify_container(data, strict_wires=True)
    assert result["errors"][0]["code"] == "E_WIRE_RANGE"


def test_estimate_mismatch():
    result = verify_container(r1cs_bytes(SAMPLE_CONSTRAINTS), security_level=1)
    assert result["status"] == "FAIL"
    err = result["errors"][0]
    assert err["code"] == "E_CONSTRAINT_ESTIMATE"
    assert err["expected"] == 14876
    assert err["declared"] == 2
    assert err["security_level"] == 1
    assert err["message"] == "Constraint count differs from the closed-form estimate"


def test_unsupported_level_report():
    result = verify_container(r1cs_bytes(SAMPLE_CONSTRAINTS), security_level=3)
    assert result["errors"][0]["code"] == "E_SECURITY_LEVEL"


def test_verify_file(tmp_path):
    p = tmp_path / "circuit.r1cs"
    p.write_bytes(r1cs_bytes(SAMPLE_CONSTRAINTS, layout="interleaved"))
    assert verify_file(p, layout="interleaved")["status"] == "PASS"
    assert verify_file(p)["status"] == "FAIL"
