"""Height/weight and body fat standards (MCO 6110.3A w/CH-4)."""

from types import MappingProxyType

from engine.scoring.tables import Gender, WeightAgeBracket

_W = (
    WeightAgeBracket.AGE_17_20,
    WeightAgeBracket.AGE_21_27,
    WeightAgeBracket.AGE_28_39,
    WeightAgeBracket.AGE_40_PLUS,
)


def _rows(rows: dict[int, tuple[int, int, int, int]]) -> MappingProxyType:
    """Build {height: {bracket: max_weight}} from per-height tuples."""
    return MappingProxyType(
        {
            height: MappingProxyType(dict(zip(_W, weights, strict=True)))
            for height, weights in rows.items()
        }
    )


# Maximum weight (lbs) by rounded height (inches) and weight age bracket
WEIGHT_STANDARDS = MappingProxyType(
    {
        Gender.MALE: _rows(
            {
                58: (131, 136, 139, 141),
                59: (136, 141, 144, 146),
                60: (141, 146, 149, 151),
                61: (146, 151, 154, 156),
                62: (150, 156, 159, 161),
                63: (155, 161, 164, 166),
                64: (160, 166, 169, 172),
                65: (165, 171, 175, 177),
                66: (170, 176, 180, 183),
                67: (175, 181, 185, 188),
                68: (181, 187, 191, 194),
                69: (186, 193, 197, 200),
                70: (191, 199, 203, 206),
                71: (197, 205, 209, 212),
                72: (202, 210, 215, 218),
                73: (208, 216, 221, 224),
                74: (214, 222, 227, 230),
                75: (220, 228, 233, 237),
                76: (226, 235, 240, 243),
                77: (232, 241, 246, 250),
                78: (238, 247, 253, 256),
                79: (244, 254, 259, 263),
                80: (250, 260, 266, 270),
            }
        ),
        Gender.FEMALE: _rows(
            {
                58: (120, 124, 126, 127),
                59: (124, 128, 130, 131),
                60: (128, 132, 134, 135),
                61: (132, 136, 139, 140),
                62: (136, 141, 143, 145),
                63: (141, 145, 148, 149),
                64: (145, 150, 152, 154),
                65: (150, 155, 157, 159),
                66: (155, 160, 163, 164),
                67: (159, 165, 168, 169),
                68: (164, 170, 173, 174),
                69: (169, 175, 178, 180),
                70: (174, 180, 183, 185),
                71: (179, 185, 189, 191),
                72: (184, 191, 194, 196),
                73: (189, 196, 200, 202),
                74: (194, 202, 205, 208),
                75: (200, 207, 211, 214),
                76: (205, 213, 217, 219),
                77: (210, 219, 223, 225),
                78: (216, 225, 229, 232),
                79: (221, 230, 235, 238),
                80: (227, 236, 241, 244),
            }
        ),
    }
)

MIN_TABULATED_HEIGHT = 58
MAX_TABULATED_HEIGHT = 80

# Maximum body fat percent
BODY_FAT_LIMITS = MappingProxyType({Gender.MALE: 18, Gender.FEMALE: 26})

# DoD circumference method: a*log10(cv) - b*log10(height) + c
BODY_FAT_COEFFICIENTS = MappingProxyType(
    {
        Gender.MALE: (86.010, 70.041, 36.76),
        Gender.FEMALE: (163.205, 97.684, -78.387),
    }
)

MEASUREMENT_INSTRUCTIONS = MappingProxyType(
    {
        "neck": "Measure at Adam's apple level. Round UP to nearest 0.5 inch.",
        "abdomen": "Measure at navel level (belly button). Round DOWN to nearest 0.5 inch.",
        "hips": "Measure at widest point of hips/buttocks. Round DOWN to nearest 0.5 inch.",
    }
)
