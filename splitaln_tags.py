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
from splitaln_utilities.SplitAlignment import value_list


def tag_lines(aln):
    """ Yield 'name<TAB>tag<TAB>values' lines for every tag of an alignment. """
    for tag in aln.get_all_tags():
        values = aln.get_tag_values(tag)
        if values is None:
            continue
        yield "\t".join([aln.display_name, tag, ",".join(str(i) for i in value_list(values))])


def main():
    parser = argparse.ArgumentParser(description="List alignment tags and their values", usage="splitaln.py tags [options] <aln.bam>")
    parser.add_argument("aln", nargs='?', default="", metavar="<aln.bam>", type=str, help="SAM/BAM/CRAM alignment file")
    parser.add_argument("-g", metavar="STR", type=str, default=None, help="only report alignments overlapping this region (requires an indexed alignment file) [null]")
    parser.add_argument("-e", action="store_true", default=False, help="expand SAM flags into one tag per flag")

    args = parser.parse_args()
    if not args.aln:
        parser.print_help()
        print("\n** The alignment file is required **")
        sys.exit()

    log("VERSION", "SplitAln " + get_splitaln_version())
    log("CMD", "splitaln.py tags " + " ".join(sys.argv[1:]))

    with SAMReader(args.aln, in_split_splices=False, in_expand_flags=args.e) as reader:
        for aln in reader.parse_alignments(region=args.g):
            for line in tag_lines(aln):
                print(line)

    log("INFO", "Goodbye")


if __name__ == "__main__":
    main()
