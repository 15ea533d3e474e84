from rctsea.__main__ import create_parser
from logging import basicConfig
import sys

try:
    from GooeyEx import Gooey, GooeyParser
except ImportError as e:
    print(
        "Please install rctsea[gui] through your Python package manager to use the GUI"
    )
    raise e


@Gooey(
    show_preview_warning=False,
    program_name="rctsea",
    advanced=True,
    monospace_display=True,
    default_size=(800, 600),
)
def __main__():
    from tqdm.std import tqdm as tqdm_c

    parser = create_parser(GooeyParser)
    args = parser.parse_args()

    class TqdmMutexStream:
        @staticmethod
        def write(__s):
            # Gooey[Ex] only reads output from stdout so we'd do that here.
            with tqdm_c.external_write_mode(file=sys.stdout, nolock=False):
                return sys.stdout.write(__s)

    basicConfig(
        level="DEBUG",
        format="%(asctime)s | %(levelname).1s | %(name)s %(message)s",
        datefmt="%H:%M:%S",
        stream=TqdmMutexStream,
    )
    if "func" in args:
        args.func(args)


if __name__ in {"__main__", "__gui__"}:
    __main__()
