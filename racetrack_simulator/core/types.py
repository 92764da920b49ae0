from typing import Literal

StrategyName = Literal[
    "do_not_move",
    "move_list",
    "path_follower",
    "path_finder",
    "user",
]

DirectionName = Literal[
    "UP_LEFT",
    "UP",
    "UP_RIGHT",
    "LEFT",
    "NONE",
    "RIGHT",
    "DOWN_LEFT",
    "DOWN",
    "DOWN_RIGHT",
]

TrackName = Literal[
    "sprint",
    "oval",
]

TurnOutcome = Literal[
    "moved",
    "crashed",
    "won",
    "skipped",
    "retired",
]
