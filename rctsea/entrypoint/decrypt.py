import os, re
from concurrent.futures import ProcessPoolExecutor, Future
from pathlib import Path
from logging import getLogger
from tqdm import tqdm

logger = getLogger("decrypt")

DEFAULT_FILTER = r".*\.sea$"


def decrypt_to(src: str, dest: str) -> int:
    from rctsea.fmt.sea import read_sea_file

    sea = read_sea_file(src)
    if os.path.dirname(dest):
        os.makedirs(os.path.dirname(dest), exist_ok=True)
    with open(dest, "wb") as f:
        f.write(sea.data)
    return len(sea.data)


class SEADecryptor(ProcessPoolExecutor):
    progress: tqdm = None
    failed: list

    def _ensure_progress(self):
        if not self.progress:
            self.progress = tqdm(total=0, unit="file")

    def _on_done(self, src: str, dest: str, future: Future):
        try:
            nbytes = future.result()
            logger.debug("Decrypted %s -> %s (%d bytes)", src, dest, nbytes)
        except Exception as e:
            logger.error("While decrypting %s : %s" % (src, e))
            self.failed.append(src)
        self.progress.update(1)

    def __init__(self, **kw) -> None:
        self.failed = list()
        super().__init__(**kw)

    def __exit__(self, exc_type, exc_val, exc_tb):
        result = super().__exit__(exc_type, exc_val, exc_tb)
        if self.progress:
            self.progress.close()
        return result

    def add_file(self, src: str, dest: str):
        self._ensure_progress()
        self.progress.total += 1
        future = self.submit(decrypt_to, src, dest)
        future.add_done_callback(lambda f: self._on_done(src, dest, f))
        return future


def main_decrypt(args):
    src_path = Path(os.path.abspath(os.path.expanduser(args.input)))
    outdir = Path(os.path.abspath(os.path.expanduser(args.outdir)))
    suffix = args.suffix or ".sv6"
    assert src_path.exists(), "Input %s does not exist" % src_path
    if src_path.is_file():
        dest = outdir / src_path.with_suffix(suffix).name
        logger.info("Decrypting %s -> %s", src_path.as_posix(), dest.as_posix())
        decrypt_to(str(src_path), str(dest))
        return
    assert src_path != outdir, "Input and output directories must be different"
    pattern = re.compile(args.filter or DEFAULT_FILTER, re.IGNORECASE)
    files = list()
    for root, dirs, fnames in os.walk(src_path):
        for fname in fnames:
            file = Path(root) / fname
            relpath = file.relative_to(src_path)
            if pattern.match(relpath.as_posix()):
                files.append((file, outdir / relpath.with_suffix(suffix)))
            else:
                logger.debug("Skipped %s", relpath.as_posix())
    logger.info("Decrypting %d files to %s", len(files), outdir.as_posix())
    with SEADecryptor(max_workers=args.workers or None) as decryptor:
        for src, dest in files:
            decryptor.add_file(str(src), str(dest))
    assert not decryptor.failed, "%d file(s) failed to decrypt" % len(decryptor.failed)
    logger.info("Done")
