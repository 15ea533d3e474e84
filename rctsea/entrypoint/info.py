import os, sys, json
from logging import getLogger

logger = getLogger("info")


def read_info(path: str) -> dict:
    from rctsea.crypto.SEA import get_encryption_key
    from rctsea.fmt.sea import split_checksum

    with open(path, "rb") as f:
        payload, checksum = split_checksum(f.read())
    name = os.path.basename(path)
    key = get_encryption_key(name)
    return {
        "name": name,
        "seed0": "%08X" % key.seed0,
        "seed1": "%08X" % key.seed1,
        "size": len(payload),
        "checksum": "%08X" % checksum,
    }


def main_info(args):
    res = dict()
    for path in args.infiles:
        path = os.path.abspath(os.path.expanduser(path))
        logger.debug("Reading %s", path)
        res[path] = read_info(path)
    match args.format:
        case "json":
            print(json.dumps(res, indent=4, ensure_ascii=False))
        case "markdown":
            # fmt: off
            print(f"|{'name'.rjust(32)}|   seed0|   seed1|        size|checksum|")
            print(f"|{'-'.rjust(32, '-')}|--------|--------|------------|--------|")
            for info in res.values():
                print(f"|{info['name'].rjust(32)}|{info['seed0']}|{info['seed1']}|{str(info['size']).rjust(12)}|{info['checksum']}|")
    return res
