import random
import time

import pytest

import huffman_core as hc
from huffman_service import HuffmanService


def test_roundtrip_random_10kb(random_data):
	svc = HuffmanService()
	compressed = svc.compress(random_data)
	assert svc.decompress(compressed) == random_data


def test_roundtrip_all_bytes_once():
	svc = HuffmanService()
	data = bytes(range(256))
	assert svc.decompress(svc.compress(data)) == data


def test_empty_input():
	svc = HuffmanService()
	compressed = svc.compress(b"")
	assert compressed.startswith(b"\xfa\xce\x82\x01")
	assert svc.decompress(compressed) == b""


def test_single_byte_repeated_small():
	svc = HuffmanService()
	data = b'A' * (1024 * 10)
	compressed = svc.compress(data)
	assert len(compressed) < len(data) // 7
	assert svc.decompress(compressed) == data


def test_small_inputs():
	svc = HuffmanService()
	rng = random.Random(3)
	for n in (1, 2, 3):
		data = bytes(rng.getrandbits(8) for _ in range(n))
		assert svc.decompress(svc.compress(data)) == data


def test_compression_is_deterministic(text_data):
	a = HuffmanService().compress(text_data)
	b = HuffmanService().compress(text_data)
	assert a == b


def test_text_compresses(text_data):
	assert len(HuffmanService().compress(text_data)) < len(text_data)


def test_truncated_stream_behavior(text_data):
	svc = HuffmanService()
	compressed = svc.compress(text_data)
	with pytest.raises(hc.TruncatedStreamError):
		svc.decompress(compressed[:-1])


@pytest.mark.parametrize('data', [b'', b'q', b'Hello World'])
def test_truncated_small_artifacts_never_succeed(data):
	svc = HuffmanService()
	compressed = svc.compress(data)
	with pytest.raises((hc.TruncatedStreamError, hc.MalformedTreeError)):
		svc.decompress(compressed[:-1])


def test_corrupted_header_behavior():
	svc = HuffmanService()
	compressed = bytearray(svc.compress(b'Hello World' * 50))
	compressed[0] ^= 0xFF
	with pytest.raises(hc.MalformedHeaderError):
		svc.decompress(bytes(compressed))


def test_decompress_garbage():
	with pytest.raises(hc.MalformedHeaderError):
		HuffmanService().decompress(b"not a huff file at all")


def test_service_initializes_processor_attribute():
	svc = HuffmanService(debug=1)
	assert svc.processor is not None
	assert svc.processor.debug == 1


def test_file_round_trip(tmp_path, text_data):
	svc = HuffmanService()
	src = tmp_path / "notes.txt"
	src.write_bytes(text_data)
	packed = tmp_path / "notes.txt.hf"
	unpacked = tmp_path / "notes.out"

	stats = svc.compress_file(str(src), str(packed))
	assert stats.bits_read == len(text_data) * 8
	assert packed.read_bytes() == svc.compress(text_data)

	svc.decompress_file(str(packed), str(unpacked))
	assert unpacked.read_bytes() == text_data


def test_decompress_file_bad_header_keeps_existing_output(tmp_path):
	src = tmp_path / "notes.txt.hf"
	src.write_bytes(b"\x00" * 16)
	dst = tmp_path / "notes.txt"
	dst.write_bytes(b"precious original")
	with pytest.raises(hc.MalformedHeaderError):
		HuffmanService().decompress_file(str(src), str(dst))
	assert dst.read_bytes() == b"precious original"


def test_decompress_file_bad_header_creates_no_output(tmp_path):
	src = tmp_path / "bogus.hf"
	src.write_bytes(b"not compressed")
	dst = tmp_path / "bogus"
	with pytest.raises(hc.MalformedHeaderError):
		HuffmanService().decompress_file(str(src), str(dst))
	assert not dst.exists()


def test_decompress_runaway_tree_header():
	with pytest.raises(hc.MalformedTreeError):
		HuffmanService().decompress(b"\xfa\xce\x82\x01" + b"\x00" * 400)


@pytest.mark.timeout(120)
def test_performance_256kb_baseline():
	svc = HuffmanService()
	rng = random.Random(11)
	data = bytes(rng.getrandbits(8) for _ in range(256 * 1024))
	t0 = time.time()
	compressed = svc.compress(data)
	dur = time.time() - t0
	assert dur > 0
	assert svc.decompress(compressed) == data
	print(f"Compression time for 256KB: {dur:.4f}s")
