"""Starter .pyfc.toml template."""

DEFAULT_TOML = """\
# pyfc configuration
version = "1.0"

[compare]
ignore_case = false          # -c
compress_whitespace = false  # -w
literal_tabs = false         # -t: do not expand tabs to 8-column stops
unicode = false              # -u: files are UTF-16LE
abbreviate = false           # -a: show first/last line of each difference
line_numbers = false         # -n
resync_window = 100          # --lb: max consecutive differing lines
min_resync_run = 2           # --min-match (accepted, currently inert)
encoding = "utf-8"           # codec for non-unicode text files
# chunk_size = 33554432      # bytes read per window

[output]
format = "terminal"          # terminal | json
show_caption = true          # print "Comparing files A and B"
"""
