"""
ALI — Machine configuration

Address map, arithmetic limits and execution profiles. Values here are
the defaults; alirun.py lets --budget override the selected profile.
"""

# =============================================================================
#  ADDRESS MAP
# =============================================================================
MEMORY_SIZE = 256

CODE_START = 0        # instruction segment [0, 128)
CODE_END = 127        # inclusive
DATA_START = 128      # data segment [128, 256)
DATA_END = 255        # inclusive

CODE_SIZE = CODE_END - CODE_START + 1
DATA_SIZE = DATA_END - DATA_START + 1


# =============================================================================
#  ARITHMETIC
# =============================================================================
# Overflow flag range. The accumulator itself is never clamped.
INT32_MAX = 2**31 - 1
INT32_MIN = -2**31


# =============================================================================
#  EXECUTION PROFILES
# =============================================================================
# instruction_budget: instructions executed before the engine pauses and
# asks whether to continue. 0 disables the pause.
DEFAULT_INSTRUCTION_BUDGET = 1000

PROFILES = {
    "default": {
        "instruction_budget": DEFAULT_INSTRUCTION_BUDGET,
        "description": "Pause every 1000 instructions (classic ALI)",
    },
    "strict": {
        "instruction_budget": 100,
        "description": "Pause every 100 instructions, for stepping loops",
    },
    "unbounded": {
        "instruction_budget": 0,
        "description": "Never pause; a runaway program never returns",
    },
}

DEFAULT_PROFILE = "default"
