import logging
from rich.logging import RichHandler
from rich.console import Console

import argparse
import os, pathlib, sys

from enum import Enum

from wcecabinfo.cabextract import CabExtractError, load_descriptor_bytes
from wcecabinfo.parser import DecodeOptions, FormatError, decode
from wcecabinfo.parser.basedirs import PLATFORMS

__version__ = "0.2.0"


class WinCECabInfo(object):
    OutputMode = Enum('OutputMode', ['Summary', 'Json', 'Registry'])

    def __init__(self, data, outputfolder=None, console=None, options=None, basename="descriptor"):
        self.console = console or setup_logging()
        self.output = outputfolder
        self.basename = basename
        self.options = options or DecodeOptions()

        self.cab = decode(data, self.options)

        logging.info(f'Architecture: {self.cab.architecture or "unknown"}')
        logging.info(f'Files: {len(self.cab.files)}, registry keys: {len(self.cab.reg_keys)}, links: {len(self.cab.links)}')

    def outputSummary(self, basic=False, field=None):
        """Output header fields one per line."""
        from wcecabinfo.output.summary import SummaryOutput
        handler = SummaryOutput(self.cab, self.output, self.console, self.basename, basic=basic, field=field)
        handler.process()

    def outputJson(self):
        """Output the whole descriptor as JSON."""
        from wcecabinfo.output.objects import JsonOutput
        handler = JsonOutput(self.cab, self.output, self.console, self.basename)
        handler.process()

    def outputRegistry(self):
        """Output registry entries in .reg format."""
        from wcecabinfo.output.registry import RegistryOutput
        handler = RegistryOutput(self.cab, self.output, self.console, self.basename)
        handler.process()


def setup_logging(level=logging.INFO):
    console = Console(stderr=True)
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        markup=True
    )

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler]
    )

    return console


def main(argv=None):

    parser = argparse.ArgumentParser(add_help=True, description='Print information about a Windows CE CAB .000 descriptor. Input can be either a cab file or an already extracted .000 file. If a cab file is provided, cabextract is needed to handle extraction.', formatter_class=argparse.RawDescriptionHelpFormatter)

    parser.add_argument('infile', type=argparse.FileType('rb'), help="Path to the .cab or .000 file, or - to read a .000 file from stdin.")
    parser.add_argument('-o', '--output', required=False, type=pathlib.Path, help="Path to an output folder. Folder will be created if it doesn't exist. Defaults to printing to stdout.", default=None)
    parser.add_argument('-m', '--mode', required=False, help="The output mode to use. Summary prints the header fields, Json the complete descriptor, Registry the registry entries as a .reg file.", choices=WinCECabInfo.OutputMode.__members__, default='Summary')
    parser.add_argument('-f', '--field', required=False, help="Only print the value of the summary field with this name. Overrides --mode.")
    parser.add_argument('-b', '--basic', action='store_true', help="Only print WCEApp, WCEArch and WCEVersion. Overrides --mode.")
    parser.add_argument('-p', '--platform', required=False, choices=sorted(PLATFORMS), help="Expand %%CEn%% directory placeholders for this device platform.")
    parser.add_argument('--lenient', action='store_true', help="Substitute an empty string for unknown string ids instead of failing.")
    parser.add_argument('-V', '--verbose', action='store_true', help="Print verbose logs.")
    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    args = parser.parse_args(argv)

    console = setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.output is not None:
        if not os.path.exists(args.output):
            try:
                os.mkdir(args.output)
            except OSError:
                logging.error(f"Unable to create output directory '{args.output}'.")
                return 1

        if not os.path.isdir(args.output):
            logging.warning(f"Path '{args.output}' does not exist or is not a folder.")
            parser.print_help()
            return 1

    name = getattr(args.infile, 'name', '<stdin>')
    basename = pathlib.Path(name).stem if name != '<stdin>' else 'stdin'

    try:
        with args.infile:
            data = load_descriptor_bytes(args.infile)
        options = DecodeOptions(strict_strings=not args.lenient, platform=args.platform)
        info = WinCECabInfo(data, args.output, console, options, basename)
    except (CabExtractError, OSError) as e:
        logging.error(str(e))
        return 1
    except FormatError as e:
        logging.error(f"Invalid .000 descriptor: {e}")
        return 1

    if args.field:
        try:
            info.outputSummary(field=args.field)
        except KeyError:
            logging.error(f"Field '{args.field}' is not present in this descriptor.")
            return 1
        return 0

    if args.basic:
        info.outputSummary(basic=True)
        return 0

    outputmode = WinCECabInfo.OutputMode[args.mode]
    if outputmode == WinCECabInfo.OutputMode.Summary:
        info.outputSummary()
    if outputmode == WinCECabInfo.OutputMode.Json:
        info.outputJson()
    if outputmode == WinCECabInfo.OutputMode.Registry:
        info.outputRegistry()
    return 0

if __name__ == '__main__':
    sys.exit(main())
