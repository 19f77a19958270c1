import json
import os
import tempfile
import unittest

from dynfee.errors import ABIParseError, QueryError
from dynfee.token import DECIMALS_SELECTOR, encode_transfer, load_abi, read_decimals

from tests.fakes import ERC20_ABI, RECEIVER, TOKEN, FakeNode


class EmptyCallNode(FakeNode):
    def call(self, to, data):
        return b""


class DecimalsTests(unittest.TestCase):
    def test_last_byte_of_padded_word(self) -> None:
        node = FakeNode(decimals=6)
        self.assertEqual(read_decimals(node, TOKEN), 6)
        self.assertEqual(node.eth_calls, [(TOKEN, bytes.fromhex("313ce567"))])
        self.assertEqual(DECIMALS_SELECTOR, b"\x31\x3c\xe5\x67")

    def test_empty_result_is_query_error(self) -> None:
        with self.assertRaises(QueryError):
            read_decimals(EmptyCallNode(), TOKEN)


class LoadAbiTests(unittest.TestCase):
    def test_json_text(self) -> None:
        self.assertEqual(load_abi(json.dumps(ERC20_ABI)), ERC20_ABI)

    def test_file_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "erc20.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump(ERC20_ABI, f)
            self.assertEqual(load_abi(path), ERC20_ABI)

    def test_artifact_wrapper(self) -> None:
        self.assertEqual(load_abi(json.dumps({"abi": ERC20_ABI, "bytecode": "0x"})), ERC20_ABI)

    def test_undecodable_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "erc20.json")
            with open(path, "wb") as f:
                f.write(b"\xff\xfe\x00garbage")
            with self.assertRaises(ABIParseError):
                load_abi(path)

    def test_malformed(self) -> None:
        with self.assertRaises(ABIParseError):
            load_abi("[{not json")
        with self.assertRaises(ABIParseError):
            load_abi('{"name": "transfer"}')


class EncodeTransferTests(unittest.TestCase):
    def test_encodes_transfer_call(self) -> None:
        data = encode_transfer(ERC20_ABI, TOKEN, RECEIVER, 1_000_000)
        self.assertEqual(len(data), 4 + 32 + 32)
        self.assertEqual(data[:4].hex(), "a9059cbb")
        self.assertEqual(data[4:36].hex(), "00" * 12 + RECEIVER[2:].lower())
        self.assertEqual(int.from_bytes(data[36:], "big"), 1_000_000)

    def test_abi_without_transfer(self) -> None:
        abi = [entry for entry in ERC20_ABI if entry["name"] != "transfer"]
        with self.assertRaises(ABIParseError):
            encode_transfer(abi, TOKEN, RECEIVER, 1)


if __name__ == "__main__":
    unittest.main()
