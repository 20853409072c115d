"""
Hand-tuned layer gradient tables.

Each table maps an available path length to the layer values laid along it,
starting next to the higher terrain. Full-length entries are plain linear
fades (basic), or fades repeating every level two (extended) or three
(extreme) times. Shorter paths use compressed fades that still start high and
end low, rather than a truncated full fade.
"""

from typing import Dict, List, Tuple

from ..config.layer_settings import GenerationMode

MIN_LAYER = 1
MAX_LAYER = 7

BASIC_GRADIENTS: Dict[int, Tuple[int, ...]] = {
    1: (4,),
    2: (5, 2),
    3: (6, 4, 2),
    4: (7, 5, 3, 1),
    5: (6, 5, 4, 2, 1),
    6: (7, 6, 5, 3, 2, 1),
    7: (7, 6, 5, 4, 3, 2, 1),
}

EXTENDED_GRADIENTS: Dict[int, Tuple[int, ...]] = {
    1: (4,),
    2: (5, 2),
    3: (6, 4, 2),
    4: (7, 5, 3, 1),
    5: (7, 6, 4, 2, 1),
    6: (7, 6, 5, 3, 2, 1),
    7: (7, 6, 5, 4, 3, 2, 1),
    8: (7, 7, 6, 5, 4, 3, 2, 1),
    9: (7, 7, 6, 5, 4, 3, 2, 1, 1),
    10: (7, 7, 6, 6, 5, 4, 3, 2, 1, 1),
    11: (7, 7, 6, 6, 5, 4, 4, 3, 2, 1, 1),
    12: (7, 7, 6, 6, 5, 5, 4, 3, 3, 2, 1, 1),
    13: (7, 7, 6, 6, 5, 5, 4, 4, 3, 2, 2, 1, 1),
    14: (7, 7, 6, 6, 5, 5, 4, 4, 3, 3, 2, 2, 1, 1),
}

EXTREME_GRADIENTS: Dict[int, Tuple[int, ...]] = {
    1: (4,),
    2: (6, 3),
    3: (6, 4, 2),
    4: (7, 5, 3, 1),
    5: (7, 6, 4, 2, 1),
    6: (7, 6, 5, 3, 2, 1),
    7: (7, 6, 5, 4, 3, 2, 1),
    8: (7, 7, 6, 5, 4, 3, 2, 1),
    9: (7, 7, 6, 6, 5, 4, 3, 2, 1),
    10: (7, 7, 6, 6, 5, 4, 3, 2, 1, 1),
    11: (7, 7, 7, 6, 5, 5, 4, 3, 2, 1, 1),
    12: (7, 7, 7, 6, 6, 5, 4, 4, 3, 2, 1, 1),
    13: (7, 7, 7, 6, 6, 5, 5, 4, 3, 3, 2, 1, 1),
    14: (7, 7, 7, 6, 6, 5, 5, 4, 4, 3, 2, 2, 1, 1),
    15: (7, 7, 7, 6, 6, 6, 5, 5, 4, 4, 3, 3, 2, 1, 1),
    16: (7, 7, 7, 6, 6, 6, 5, 5, 4, 4, 3, 3, 2, 2, 1, 1),
    17: (7, 7, 7, 6, 6, 6, 5, 5, 5, 4, 4, 3, 3, 2, 2, 1, 1),
    18: (7, 7, 7, 6, 6, 6, 5, 5, 5, 4, 4, 4, 3, 3, 2, 2, 1, 1),
    19: (7, 7, 7, 6, 6, 6, 5, 5, 5, 4, 4, 4, 3, 3, 3, 2, 2, 1, 1),
    20: (7, 7, 7, 6, 6, 6, 5, 5, 5, 4, 4, 4, 3, 3, 3, 2, 2, 2, 1, 1),
    21: (7, 7, 7, 6, 6, 6, 5, 5, 5, 4, 4, 4, 3, 3, 3, 2, 2, 2, 1, 1, 1),
}

GRADIENT_TABLES: Dict[GenerationMode, Dict[int, Tuple[int, ...]]] = {
    GenerationMode.BASIC: BASIC_GRADIENTS,
    GenerationMode.EXTENDED: EXTENDED_GRADIENTS,
    GenerationMode.EXTREME: EXTREME_GRADIENTS,
}


def gradient_for(mode: GenerationMode, path_length: int) -> List[int]:
    """
    Layer values for a path of ``path_length`` low columns.

    Paths longer than the mode's longest table (possible with a maximum
    layer distance above 7) keep the full fade and continue at 1.
    """
    if path_length <= 0:
        return []

    table = GRADIENT_TABLES[mode]
    longest = max(table)
    if path_length <= longest:
        return list(table[path_length])

    return list(table[longest]) + [MIN_LAYER] * (path_length - longest)
