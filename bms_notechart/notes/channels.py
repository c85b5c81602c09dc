# BMS channel -> game column. Column labels are read by the renderer, keep them stable.

IIDX_P1 = {
    "11": "1",
    "12": "2",
    "13": "3",
    "14": "4",
    "15": "5",
    "18": "6",
    "19": "7",
    "16": "SC",
}

IIDX_P2 = {
    "21": "1",
    "22": "2",
    "23": "3",
    "24": "4",
    "25": "5",
    "28": "6",
    "29": "7",
    "26": "SC",
}

IIDX_DP = {
    **IIDX_P1,
    "21": "8",
    "22": "9",
    "23": "10",
    "24": "11",
    "25": "12",
    "28": "13",
    "29": "14",
    "26": "SC2",
}


# landmines live on Dx (player 1) / Ex (player 2), one-to-one with the note channels
def _landmine(mapping: dict[str, str], prefixes: dict[str, str]) -> dict[str, str]:
    return {
        prefixes[channel[0]] + channel[1]: column
        for channel, column in mapping.items()
        if channel[0] in prefixes
    }


IIDX_P1_LANDMINE = _landmine(IIDX_P1, {"1": "D"})
IIDX_P2_LANDMINE = _landmine(IIDX_P2, {"2": "E"})
IIDX_DP_LANDMINE = _landmine(IIDX_DP, {"1": "D", "2": "E"})
