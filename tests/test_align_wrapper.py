import array

from pytest import fixture, raises

from conftest import REF_SEQ, make_header, make_record, write_bam
from splitaln_utilities.AlignmentReader import SAMReader
from splitaln_utilities.AlignWrapper import flag_str
from splitaln_utilities.SplitAlignment import format_attributes


def by_name(reader, **kwargs):
    return {aln.name: aln for aln in reader.parse_alignments(**kwargs)}


@fixture
def reader(bam_file, fasta_file):
    with SAMReader(bam_file, fasta_file) as r:
        yield r


@fixture
def compact(bam_file):
    with SAMReader(bam_file) as r:
        yield by_name(r)


@fixture
def expanded(bam_file):
    with SAMReader(bam_file, in_expand_flags=True) as r:
        yield by_name(r)


def test_unmapped_skipped(reader):
    alns = list(reader.parse_alignments())
    assert [a.name for a in alns] == ["read2", "read1"]
    assert len(list(reader.parse_alignments(include_unmapped=True))) == 3


def test_accessors(reader):
    alns = by_name(reader)
    read1, read2 = alns["read1"], alns["read2"]
    assert read1.seq_id == "chr1"
    assert (read1.start, read1.end, read1.strand) == (1000, 1279, 1)
    assert read1.length == 280
    assert read1.cigar_str == "50M200N30M"
    assert read1.score == 60
    assert read1.display_name == "read1"
    assert read1.primary_id == "read1:chr1:1000"
    assert (read2.start, read2.end, read2.strand) == (100, 139, -1)


def test_split_parts(reader):
    read1 = by_name(reader)["read1"]
    parts = read1.get_SeqFeatures()
    assert [(p.start, p.end, p.cigar_str) for p in parts] == [(1000, 1049, "M50"), (1250, 1279, "M30")]
    assert [(p.hit.start, p.hit.end) for p in parts] == [(1, 50), (51, 80)]
    assert parts[0].seq == REF_SEQ[999:1049]
    assert parts[1].seq == REF_SEQ[1249:1279]
    assert parts[0].hit.seq == "A" * 50
    assert parts[1].hit.seq == "C" * 30
    assert parts[1].subseq(1, 5) == REF_SEQ[1249:1254]


def test_unspliced_not_split(reader):
    assert by_name(reader)["read2"].get_SeqFeatures() == []


def test_split_disabled(bam_file):
    with SAMReader(bam_file, in_split_splices=False) as r:
        assert by_name(r)["read1"].get_SeqFeatures() == []


def test_dna(reader, compact):
    read1 = by_name(reader)["read1"]
    assert read1.dna() == REF_SEQ[999:1279]
    assert read1.subseq(1, 10) == REF_SEQ[999:1009]
    assert read1.subseq(-5, 3) == REF_SEQ[999:1002]
    assert compact["read1"].dna() == "N" * 280
    assert [p.seq for p in compact["read1"].get_SeqFeatures()] == ["N" * 50, "N" * 30]


def test_compact_tags(compact):
    read1, read2 = compact["read1"], compact["read2"]
    assert read1.get_all_tags() == ["NM", "XS", "FLAGS"]
    assert read2.get_all_tags() == ["FLAGS"]
    assert read1.get_tag_values("FLAGS") == ""
    assert read2.get_tag_values("FLAGS") == "REVERSED"
    assert read1.get_tag_values("NM") == 2
    assert read1.get_tag_values("XS") == "+"
    assert read1.get_tag_values("ZZ") is None
    assert read1.get_tag_values(None) is None
    assert read2.has_tag("FLAGS")
    assert read1.has_tag("nm")
    assert not read1.has_tag("ZZ")
    assert not read1.has_tag(None)
    assert read1.attributes("NM") == 2
    assert read1.attributes() == {"NM": 2, "XS": "+", "FLAGS": ""}


def test_expanded_tags(expanded):
    read1, read2 = expanded["read1"], expanded["read2"]
    tags = read1.get_all_tags()
    assert tags[:2] == ["NM", "XS"]
    assert "REVERSED" in tags
    assert "FLAGS" not in tags
    assert read2.get_tag_values("REVERSED") == 1
    assert read1.get_tag_values("REVERSED") == 0
    assert read1.get_tag_values("NM") == 2
    assert read1.get_tag_values("ZZ") is None
    assert read1.has_tag("PAIRED")
    assert read1.has_tag("NM")
    assert not read1.has_tag("FLAGS")


def test_flag_str():
    assert flag_str(0) == ""
    assert flag_str(0x1 | 0x10 | 0x40) == "PAIRED|REVERSED|FIRST_MATE"
    assert flag_str(0x800) == "SUPPLEMENTARY"


def test_gff3_string(compact):
    lines = compact["read1"].gff3_string().split("\n")
    assert len(lines) == 3
    assert lines[0].split("\t") == [
        "chr1", "sam/bam", "match", "1000", "1279", "60", "+", ".",
        "Name=read1;ID=read1:chr1:1000;NM=2;XS=+;FLAGS="
    ]
    assert lines[1].split("\t") == [
        "chr1", "sam/bam", "match", "1000", "1049", ".", "+", ".",
        "Name=read1;Parent=read1:chr1:1000;ID=read1:chr1:1000.1;Target=read1%201%2050%20+"
    ]
    assert lines[2].split("\t")[3:5] == ["1250", "1279"]
    assert lines[2].split("\t")[8].endswith("Target=read1%2051%2080%20+")


def test_gff3_string_unsplit(compact):
    fields = compact["read2"].gff3_string(parent_id="pair1").split("\t")
    assert fields[6] == "-"
    assert fields[8] == "Name=read2;Parent=pair1;ID=read2:chr1:100;FLAGS=REVERSED"


def test_region(reader):
    region = reader.region("chr1", 900, 1100)
    assert region.length == 201
    assert region.strand == 0
    assert region.primary_tag == "region"
    assert region.dna() == REF_SEQ[899:1100]
    assert [a.name for a in region.features()] == ["read1"]
    assert [a.name for a in reader.parse_alignments(region="chr1:50-150")] == ["read2"]
    assert reader.region("chr1").length == len(REF_SEQ)


def test_region_without_reference(bam_file):
    with SAMReader(bam_file) as r:
        assert r.region("chr1", 1, 10).dna() == "N" * 10


def test_region_invalid(reader):
    with raises(ValueError):
        reader.region("chr1", 100, 50)


def test_missing_alignment_file(tmp_path):
    with raises(ValueError):
        SAMReader(str(tmp_path / "missing.bam"))


def test_sequence_missing_from_reference(tmp_path, fasta_file):
    header = make_header()
    bam = write_bam(tmp_path / "chr2.bam", header, [
        make_record(header, "read4", 0, 1, 9, "10M50N10M", "T" * 20, 60),
    ])
    with SAMReader(bam, fasta_file) as r:
        read4 = by_name(r)["read4"]
        assert read4.seq_id == "chr2"
        assert [p.seq for p in read4.get_SeqFeatures()] == ["N" * 10, "N" * 10]
        assert [p.hit.seq for p in read4.get_SeqFeatures()] == ["T" * 10, "T" * 10]
        assert read4.dna() == "N" * 70
        assert r.region("chr2", 1, 10).dna() == "N" * 10


def test_array_tag(tmp_path):
    header = make_header()
    bam = write_bam(tmp_path / "array.bam", header, [
        make_record(header, "read5", 0, 0, 9, "20M", "A" * 20, 60,
                    tags=[("ZB", array.array("i", [1, 2, 3]), None)]),
    ])
    with SAMReader(bam) as r:
        read5 = by_name(r)["read5"]
        assert list(read5.get_tag_values("ZB")) == [1, 2, 3]
        assert read5.format_attributes().endswith(";ZB=1,2,3;FLAGS=")


def test_parent_id_escaped():
    attributes = format_attributes([("NM", 1)], name="read 6", parent_id="read 6:chr1:10", feature_id="read 6:chr1:10.1")
    assert attributes == "Name=read%206;Parent=read%206:chr1:10;ID=read%206:chr1:10.1;NM=1"
