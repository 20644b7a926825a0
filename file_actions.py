"""What to do with a (dump file, live file) pair."""
import hashlib
import os
import shutil
import subprocess
import sys
from pathlib import Path

PRINT = "print"
COPY = "copy"
COPY_IF_DIFFERENT = "copy-if-different"
DIFF = "diff"

CHUNK_SIZE = 1024 * 1024


def sha512_stream(fh) -> bytes:
    h = hashlib.sha512()
    for chunk in iter(lambda: fh.read(CHUNK_SIZE), b""):
        h.update(chunk)
    return h.digest()


def copy_file(src: Path, dst: Path):
    """Copy src over dst unconditionally."""
    with open(src, "rb") as src_fh:
        with open(dst, "wb") as dst_fh:
            print(f"cp {src} {dst}")
            shutil.copyfileobj(src_fh, dst_fh, CHUNK_SIZE)


def copy_if_different(src: Path, dst: Path) -> bool:
    """
    Copy src over dst only when their SHA-512 digests differ.

    dst is created if missing. Returns True when a copy happened.
    """
    with open(src, "rb") as src_fh:
        src_digest = sha512_stream(src_fh)
        fd = os.open(dst, os.O_RDWR | os.O_CREAT, 0o666)
        with os.fdopen(fd, "r+b") as dst_fh:
            if sha512_stream(dst_fh) == src_digest:
                return False
            src_fh.seek(0)
            dst_fh.seek(0)
            print(f"cp {src} {dst}")
            shutil.copyfileobj(src_fh, dst_fh, CHUNK_SIZE)
            dst_fh.truncate()
    return True


def diff_files(old: Path, new: Path, program: str = "diff") -> int:
    """
    Run a context diff and echo the command line and its output.

    diff exits 1 when the files differ, so the exit status is returned rather
    than treated as a failure. A program that cannot be started raises OSError.
    """
    cmd = [program, "-c", str(old), str(new)]
    print(" ".join(cmd))
    result = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    # output is passed through as bytes; the files need not be valid text
    sys.stdout.flush()
    sys.stdout.buffer.write(result.stdout)
    sys.stdout.buffer.flush()
    return result.returncode


def apply(action: str, dump_file: Path, live_file: Path, diff_program: str = "diff"):
    if action == COPY:
        copy_file(dump_file, live_file)
    elif action == COPY_IF_DIFFERENT:
        copy_if_different(dump_file, live_file)
    elif action == DIFF:
        diff_files(dump_file, live_file, diff_program)
    elif action == PRINT:
        print(dump_file)
    else:
        raise ValueError(f"unknown action: {action}")
