import argparse, sys, logging

# region Deferred imports
# This can be done a lot cleaner with importlib. But tools like PyInstaller really
# won't like that.

def main_decrypt(*args, **kwargs):
    from rctsea.entrypoint.decrypt import main_decrypt
    return main_decrypt(*args, **kwargs)

def main_info(*args, **kwargs):
    from rctsea.entrypoint.info import main_info
    return main_info(*args, **kwargs)

# endregion

from rctsea.entrypoint.decrypt import DEFAULT_FILTER

logger = logging.getLogger(__name__)


def create_parser(clazz=argparse.ArgumentParser):
    """
    Create the command line parser for the application.

    Args:
        clazz (type): The parser class to use. Defaults to argparse.ArgumentParser.
        In GUI mode this should be set to GooeyParser otherwise.
    """

    def gooey_only(**kwargs):
        # Silent non-argparse kwargs
        if clazz == argparse.ArgumentParser:
            return {}
        return kwargs

    parser = clazz(
        description="""RCT .SEA scenario/save decryption utility""",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="logging level (default: %(default)s)",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    subparsers = parser.add_subparsers(
        title="subcommands", description="valid subcommands", help="additional help"
    )
    # decrypt
    decrypt_parser = subparsers.add_parser(
        "decrypt",
        usage="""Decrypt .SEA files
The key of every file is derived from its file name. Do NOT rename the files before decrypting them.""",
    )
    decrypt_parser.add_argument(
        "input",
        type=str,
        help="input .SEA file, or a directory to search for them",
        **gooey_only(widget="FileChooser"),
    )
    decrypt_parser.add_argument(
        "outdir", type=str, help="output directory", **gooey_only(widget="DirChooser")
    )
    decrypt_parser.add_argument(
        "--suffix",
        type=str,
        help="file suffix of the decrypted files (default: %(default)s)",
        default=".sv6",
    )
    decrypt_parser.add_argument(
        "--filter",
        type=str,
        help="only decrypt files whose path (relative to the input directory) matches this regex, case insensitive (default: %(default)s)",
        default=DEFAULT_FILTER,
    )
    decrypt_parser.add_argument(
        "--workers",
        type=int,
        help="number of worker processes. 0 for one per CPU (default: %(default)s)",
        default=0,
    )
    decrypt_parser.set_defaults(func=main_decrypt)
    # info
    info_parser = subparsers.add_parser(
        "info",
        usage="""Show key and checksum information of .SEA files without decrypting them
*NOTE*: The stored checksum is NOT verified.""",
    )
    info_parser.add_argument(
        "infiles",
        type=str,
        nargs="+",
        help="input .SEA files",
        **gooey_only(widget="MultiFileChooser"),
    )
    info_parser.add_argument(
        "--format",
        choices=["markdown", "json"],
        help="output format",
        default="markdown",
    )
    info_parser.set_defaults(func=main_info)
    return parser


def __main__():
    from tqdm.std import tqdm as tqdm_c

    class TqdmMutexStream:
        @staticmethod
        def write(__s):
            with tqdm_c.external_write_mode(file=sys.stderr, nolock=False):
                return sys.stderr.write(__s)

    # parse args
    parser = create_parser(argparse.ArgumentParser)
    args = parser.parse_args()
    # set logging level
    import coloredlogs

    coloredlogs.install(
        level=args.log_level,
        format="%(asctime)s | %(levelname).1s | %(name)s %(message)s",
        datefmt="%H:%M:%S",
        isatty=True,
        stream=TqdmMutexStream,
    )
    if "func" in args:
        try:
            args.func(args)
            return 0
        except Exception as e:
            logger.exception("Error while running command: %s", e)
            return 1
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(__main__() or 0)
