"""
Labels for clarity.
"""

from typing import Dict, List, Literal, Tuple

Word = str  # 5 lower-case letters a -> z
Mark = Literal["hit", "present", "miss"]
MarkSequence = Tuple[Mark, ...]  # one mark per letter, frozen once produced
Mode = Literal["normal", "cheat", "daily"]
GameStatus = Literal["playing", "won", "lost"]
Keyboard = Dict[str, Mark]
Pool = List[Word]
