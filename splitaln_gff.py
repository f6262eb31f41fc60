#!/usr/bin/env python

"""
MIT License

Copyright (c) 2021 Michael Alonge <malonge11@gmail.com>

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""

import sys
import argparse

from splitaln_utilities.utilities import log, get_splitaln_version
from splitaln_utilities.AlignmentReader import SAMReader


def write_gff(reader, out, region=None):
    """ Write each alignment, followed by its split parts, as GFF3. Return the number of alignments written. """
    out.write("##gff-version 3\n")
    n = 0
    for aln in reader.parse_alignments(region=region):
        out.write(aln.gff3_string() + "\n")
        n += 1
    return n


def main():
    parser = argparse.ArgumentParser(description="Write spliced alignments and their split parts as GFF3", usage="splitaln.py gff [options] <aln.bam>")
    parser.add_argument("aln", nargs='?', default="", metavar="<aln.bam>", type=str, help="SAM/BAM/CRAM alignment file")
    parser.add_argument("-r", metavar="<ref.fa>", type=str, default=None, help="reference FASTA file (uncompressed or bgzipped) [null]")
    parser.add_argument("-g", metavar="STR", type=str, default=None, help="only write alignments overlapping this region (requires an indexed alignment file) [null]")
    parser.add_argument("-o", metavar="PATH", type=str, default=None, help="output GFF3 file path [stdout]")
    parser.add_argument("-e", action="store_true", default=False, help="expand SAM flags into one attribute per flag")
    parser.add_argument("--no-split", action="store_true", default=False, help="do not split alignments at skip (N) operations")
    parser.add_argument("--cumulative-skips", action="store_true", default=False, help="add up all preceding skip lengths when placing split parts")

    args = parser.parse_args()
    if not args.aln:
        parser.print_help()
        print("\n** The alignment file is required **")
        sys.exit()

    log("VERSION", "SplitAln " + get_splitaln_version())
    log("CMD", "splitaln.py gff " + " ".join(sys.argv[1:]))

    with SAMReader(args.aln, args.r, in_split_splices=not args.no_split, in_expand_flags=args.e, in_cumulative_skips=args.cumulative_skips) as reader:
        if args.o is None:
            n = write_gff(reader, sys.stdout, region=args.g)
        else:
            with open(args.o, "w") as out:
                n = write_gff(reader, out, region=args.g)

    log("INFO", "Wrote %d alignments" % n)
    log("INFO", "Goodbye")


if __name__ == "__main__":
    main()
