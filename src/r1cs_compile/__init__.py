"""R1CS Compile - circom boundary and constraint table export."""
