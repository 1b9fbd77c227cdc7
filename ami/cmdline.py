"""
This is an interpreter for the Ami calculator language.

For example:

    ami program.ami

will run program.ami and print the value of its last statement,
or else try to explain what went wrong.

    ami

with no program starts an interactive session. Each line you type
is evaluated in the same environment, so assignments persist.
"""
import sys, argparse
from pathlib import Path
from typing import Optional, TextIO

parser = argparse.ArgumentParser(
	prog="ami",
	description="Interpreter for the Ami calculator language.",
	epilog=__doc__.strip().split("\n", 1)[1],
	formatter_class=argparse.RawDescriptionHelpFormatter,
)
parser.add_argument("program", nargs="?", help="a file of statements, one per line. Omit for an interactive session.")
parser.add_argument('-v', "--verbose", action="count", help="Show the tokens and the tree of each input before evaluating it.")

PROMPT = "> "

def run_text(text: str, evaluator, report, path: Optional[Path] = None) -> bool:
	""" Push one input through the whole pipeline. Print the value, or complain. """
	from .errors import AmiError
	from .scanner import scan_text
	from .front_end import Parser
	from .values import render
	try:
		tokens = scan_text(text)
		report.trace_tokens(tokens)
		tree = Parser(tokens).parse()
		report.trace_tree(tree)
		value = evaluator.run(tree)
	except AmiError as ex:
		report.error(ex, text, path)
		report.complain_to_console()
		report.reset()
		return False
	print(render(value))
	return True

def repl(evaluator, report, stdin: TextIO = None):
	""" Read lines until end of input, evaluating each against one long-lived evaluator. """
	stdin = stdin or sys.stdin
	while True:
		print(PROMPT, end="", flush=True)
		line = stdin.readline()
		if not line:
			print()
			return
		run_text(line, evaluator, report)

def run(args):
	from .diagnostics import Report
	from .evaluator import Evaluator
	report = Report(verbose=args.verbose)
	evaluator = Evaluator()
	if args.program is None:
		repl(evaluator, report)
		return 0
	path = Path(args.program)
	try:
		text = path.read_text(encoding="utf-8")
	except OSError as ex:
		print("Could not read %s: %s" % (path, ex.strerror or ex), file=sys.stderr)
		return 1
	report.info("Running", path)
	return 0 if run_text(text, evaluator, report, path) else 1

def main(argv=None):
	sys.exit(run(parser.parse_args(argv)))
