import sys

from lookahead_inspector.manual_processor import cli

sys.exit(cli())
