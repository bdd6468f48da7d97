"""MediaMenu - control desktop media players through playerctl."""
