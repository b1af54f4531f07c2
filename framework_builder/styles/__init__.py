"""Colors and CSS class names for the board."""
