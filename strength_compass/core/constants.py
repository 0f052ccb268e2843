"""Product-wide constants: enumerated option sets and validation bounds."""

import re
from typing import Final

AUTH_TOKEN_KEY: Final = "auth_token"
FALLBACK_MODEL_VERSION: Final = "fallback-v1.0"

# Endpoints served by local stand-ins; auth failures there never clear the token
MOCK_ENDPOINT_PREFIXES: Final = ("/api/auth/", "/api/meets/", "/api/coach/")

EQUIPMENT_OPTIONS: Final = (
    {"value": "Raw", "label": "Raw (No Equipment)", "description": "Belt only"},
    {"value": "Wraps", "label": "Raw with Wraps", "description": "Belt + knee wraps"},
    {"value": "Single-ply", "label": "Single-ply", "description": "Single-layer supportive suit"},
    {"value": "Multi-ply", "label": "Multi-ply", "description": "Multi-layer supportive suit"},
    {"value": "Straps", "label": "Straps", "description": "Lifting straps allowed"},
    {"value": "Unlimited", "label": "Unlimited", "description": "Any supportive equipment"},
)

SEX_OPTIONS: Final = (
    {"value": "M", "label": "Male"},
    {"value": "F", "label": "Female"},
    {"value": "Mx", "label": "Mixed/Other"},
)

AGE_MIN: Final = 10
AGE_MAX: Final = 90
BODYWEIGHT_MIN_KG: Final = 30
BODYWEIGHT_MAX_KG: Final = 300
LIFT_MIN_KG: Final = 0
LIFT_MAX_KG: Final = 1000
PASSWORD_MIN_LENGTH: Final = 8
PASSWORD_MAX_LENGTH: Final = 128
EMAIL_PATTERN: Final = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# What-if slider bounds
AGE_ADJUSTMENT_LIMIT: Final = 20
BODYWEIGHT_ADJUSTMENT_LIMIT_KG: Final = 30

KG_TO_LBS: Final = 2.20462

# Share of the predicted total attributed to each lift
SQUAT_SHARE: Final = 0.38
BENCH_SHARE: Final = 0.25
DEADLIFT_SHARE: Final = 0.37
