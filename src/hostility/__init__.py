"""Edit host tables through ordered command-line rules."""
