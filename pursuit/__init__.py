"""Rule-based decision engine for maze pursuers."""
