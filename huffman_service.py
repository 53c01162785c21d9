# // filename: huffman_service.py

import io

from huffman_bitio import BitInputStream, BitOutputStream
from huffman_processor import HuffProcessor


class HuffmanService:
    def __init__(self, debug=0):
        self.processor = HuffProcessor(debug)

    def compress(self, data):
        out = io.BytesIO()
        self.processor.compress(
            BitInputStream(io.BytesIO(data)),
            BitOutputStream(out, close_stream=False),
        )
        return out.getvalue()

    def decompress(self, data):
        out = io.BytesIO()
        self.processor.decompress(
            BitInputStream(io.BytesIO(data)),
            BitOutputStream(out, close_stream=False),
        )
        return out.getvalue()

    def compress_file(self, src, dst):
        with open(src, "rb") as f_in:
            return self.processor.compress(BitInputStream(f_in), BitOutputStream(open(dst, "wb")))

    def decompress_file(self, src, dst):
        """Decompress `src` into `dst`.

        A bad header is reported before `dst` is opened, so an existing file
        there is left alone. On a later decoding error `dst` keeps whatever
        was written before the failure; deleting it is up to the caller.
        """
        with open(src, "rb") as f_in:
            bit_in = BitInputStream(f_in)
            self.processor.check_header(bit_in)
            bit_in.reset()
            return self.processor.decompress(bit_in, BitOutputStream(open(dst, "wb")))
