from .note import BMSNote
from .builder import Notes
from .channels import (
    IIDX_P1,
    IIDX_P2,
    IIDX_DP,
    IIDX_P1_LANDMINE,
    IIDX_P2_LANDMINE,
    IIDX_DP_LANDMINE,
)
