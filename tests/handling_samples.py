"""Handling lines shared by the codec tests."""

GTA3_HEADER = "; GTA3 handling.cfg\n; identifier mass dimensions ...\n"

GTA3_INFERNUS = (
    "INFERNUS       1500.0 2.0 4.5 1.4 0.0 0.0 -0.25 70 0.8 0.8 0.5 5 240.0 30.0 R P "
    "10.0 0.5 0 30.0 1.6 0.1 0.25 0.5 45000 0.30 -0.15 0.5 0 1 1"
)
GTA3_PREDATOR = (
    "PREDATOR   2000.0 3.0 8.0 2.0 0.0 0.0 0.0 40 0.65 1.0 0.5 5 180.0 40.0 R P "
    "0.02 0.5 0 25.0 1.0 3.0 0.1 0.5 40000 0.1 -0.1 0.5 0 0 0"
)
GTA3_STINGER = (
    "STINGER 1200.0 2.0 4.5 1.3 0.0 0.0 -0.2 70 0.75 0.85 0.5 5 200.0 28.0 R P "
    "9.0 0.5 1 30.0 1.5 0.1 0.2 0.5 52000 0.25 -0.15 0.5 0 1 1"
)

GTAVC_ANGEL = (
    "ANGEL          200.0 0.4 2.2 1.2 0.0 0.05 -0.1 103 1.2 0.9 0.48 5 190.0 30.0 R P "
    "14.0 0.5 0 35.0 0.85 0.15 0.1 0.15 10000 0.15 -0.16 0.5 0.0 1000 1 1"
)

GTASA_INFERNUS = (
    "INFERNUS    1400.0 2725.3 1.5 0.0 0.0 -0.25 70 0.70 0.8 0.5 5 240.0 30.0 10.0 4 P "
    "11.0 0.51 0 30.0 1.2 0.19 0.0 0.25 -0.1 0.5 0.4 0.37 0.72 95000 40002004 C04000 1 1 1"
)
GTASA_NRG500 = (
    "NRG500      200.0 60.0 5.0 0.0 0.08 -0.09 103 1.6 0.9 0.48 5 190.0 50.0 5.0 R P "
    "14.0 0.5 0 35.0 0.85 0.15 0.0 0.15 -0.20 0.5 0.0 0.0 0.15 20000 1002000 0 1 1 4"
)


def gta3_file(*lines: str, newline: str = "\n") -> str:
    body = [line for line in GTA3_HEADER.splitlines()] + list(lines)
    return newline.join(body) + newline
