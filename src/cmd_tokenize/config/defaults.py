"""Default configuration values."""

DEFAULT_CONFIG_YAML = """
config:
  color: true

options:
  use_windows_delimiters: false
  first_is_exec: true
  unpack_combined_options: true
  preserve_quotes: false
  use_options_terminator: true
  throw_on_unbalanced_quote: true

theme:
  executable: "bold"
  option: "ansicyan"
  key: "ansicyan"
  value: "ansigreen"
  terminator: "ansiyellow bold"
  after-terminator: "ansibrightblack"
  argument: ""
  error: "ansired underline"
"""
