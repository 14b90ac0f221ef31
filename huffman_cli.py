"""
Command line entry point: huffman [-x] file.in file.out
"""
import argparse
import sys

from huffman_archive import ArchiveError, HuffmanCompressor


def build_parser():
    ap = argparse.ArgumentParser(
        prog="huffman",
        description="Compress a file with static Huffman coding or extract an archive.",
        epilog="file.in must exist",
    )
    ap.add_argument("-x", dest="extract", action="store_true", help="extract archive")
    ap.add_argument("input", metavar="file.in", help="file to read")
    ap.add_argument("output", metavar="file.out", help="file to write")
    return ap


def main(argv=None):
    ap = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = ap.parse_args(argv)
    # only the forms "file.in file.out" and "-x file.in file.out"
    if args.extract and (len(argv) != 3 or argv[0] != "-x"):
        ap.error("-x must be given once, before file.in")

    try:
        fin = open(args.input, "rb")
    except OSError as e:
        ap.error(f"Can't open files: {e}")
    try:
        fout = open(args.output, "wb")
    except OSError as e:
        fin.close()
        ap.error(f"Can't open files: {e}")

    compressor = HuffmanCompressor(verbose=True)
    with fin, fout:
        try:
            if args.extract:
                log = compressor.decompress(fin, fout)
            else:
                log = compressor.compress(fin, fout)
        except ArchiveError as e:
            print(e, file=sys.stderr)
            return 1

    print(log)
    return 0


if __name__ == "__main__":
    sys.exit(main())
