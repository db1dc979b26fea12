"""Output modes. Each handler renders a decoded Descriptor to text."""
import codecs
import logging
import os
import sys

from rich.console import Console


class OutputHandler:
    """Shared plumbing: render to a file in the output folder, or to stdout."""

    extension = "txt"

    def __init__(self, descriptor, output_folder=None, console: Console = None, basename="descriptor"):
        self.cab = descriptor
        self.output = output_folder
        self.console = console or Console(stderr=True)
        self.outputfile = f"{basename}.{self.extension}"

    def render(self):
        raise NotImplementedError

    def process(self):
        text = self.render()

        if self.output is None:
            sys.stdout.write(text)
            return

        filename = os.path.join(self.output, self.outputfile)
        try:
            with codecs.open(filename, 'w', 'utf-8') as fh_out:
                fh_out.write(text)
        except OSError:
            logging.error('Could not write file: %s', filename)
            raise

        self.console.print(f"[green]✓[/green] Output written to {filename}")
