MAX_BASE_SCORE = 10_000_000

EX_PLUS_SCORE = 9_900_000
EX_SCORE = 9_800_000
AA_SCORE = 9_500_000
A_SCORE = 9_200_000
B_SCORE = 8_900_000
C_SCORE = 8_600_000

# Points per +1.0 of potential modifier on either side of EX.
EX_RATIO = 200_000
AA_RATIO = 300_000

# Modifier awarded to a full-accuracy play.
PM_MODIFIER = 2
