"""Starter .diff2html.toml template."""

DEFAULT_TOML = """\
# diff2html configuration
version = "1.0"

[input]
source = "command"        # command | file | stdin
# ignore = ["package-lock.json", "yarn.lock"]   # excluded from git diff

[parser]
# src_prefix = "old/"     # stripped in addition to a/ b/ i/ w/ c/ o/
# dst_prefix = "new/"
# diff_max_changes = 5000         # files with more changed lines are collapsed
# diff_max_line_length = 10000    # files with a longer line are collapsed

[render]
diff_style = "word"       # word | char
color_scheme = "auto"     # auto | light | dark
matching = "none"         # none | lines | words
match_words_threshold = 0.25
matching_max_comparisons = 1000
max_line_size_in_block_for_comparison = 200
max_line_length_highlight = 10000
render_nothing_when_empty = false

[output]
style = "line"            # line | side
format = "html"           # html | json
destination = "preview"   # preview | stdout
summary = "closed"        # closed | open | hidden
file_content_toggle = true
synchronised_scroll = true
highlight_code = true
# title = "My diff"
# html_wrapper_template = "wrapper.html"
"""
