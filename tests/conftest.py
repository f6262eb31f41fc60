import pysam
from pytest import fixture

REF_SEQ = "ACGTTGCA" * 250


def make_header():
    return pysam.AlignmentHeader.from_dict({
        "HD": {"VN": "1.6", "SO": "coordinate"},
        "SQ": [{"SN": "chr1", "LN": len(REF_SEQ)}, {"SN": "chr2", "LN": 500}]
    })


def make_record(header, name, flag, tid, pos, cigar, seq, mapq, tags=()):
    record = pysam.AlignedSegment(header)
    record.query_name = name
    record.query_sequence = seq
    record.flag = flag
    record.reference_id = tid
    record.reference_start = pos
    record.mapping_quality = mapq
    if cigar:
        record.cigarstring = cigar
    for tag, value, value_type in tags:
        record.set_tag(tag, value, value_type=value_type)
    return record


def write_bam(path, header, records):
    with pysam.AlignmentFile(str(path), "wb", header=header) as out:
        for record in records:
            out.write(record)
    pysam.index(str(path))
    return str(path)


@fixture
def fasta_file(tmp_path):
    path = tmp_path / "ref.fa"
    with open(path, "w") as f:
        f.write(">chr1\n")
        for i in range(0, len(REF_SEQ), 60):
            f.write(REF_SEQ[i:i+60] + "\n")
    pysam.faidx(str(path))
    return str(path)


@fixture
def bam_file(tmp_path):
    path = tmp_path / "aln.bam"
    header = make_header()
    records = [
        make_record(header, "read2", 16, 0, 99, "40M", "G" * 40, 30),
        make_record(header, "read1", 0, 0, 999, "50M200N30M", "A" * 50 + "C" * 30, 60,
                    tags=[("NM", 2, "i"), ("XS", "+", "A")]),
        make_record(header, "read3", 4, -1, -1, None, "ACGT", 0),
    ]
    return write_bam(path, header, records)
