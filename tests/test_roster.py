import json
import os
import tempfile
import unittest

import httpx

from spin_wheel.roster import RosterClient, load_roster_file, names_from_csv, parse_roster


class TestParsing(unittest.TestCase):
    def test_csv(self):
        self.assertEqual(names_from_csv(" Alice, Bob ,,Carol,"), ["Alice", "Bob", "Carol"])
        self.assertEqual(names_from_csv(""), [])

    def test_plain_text(self):
        self.assertEqual(parse_roster("Alice\n\n  Bob  \nCarol\n"), ["Alice", "Bob", "Carol"])

    def test_json_list(self):
        self.assertEqual(parse_roster('["Alice", " Bob "]'), ["Alice", "Bob"])

    def test_json_state_record(self):
        doc = {
            "version": 1,
            "participants": [
                {"id": "1", "name": "Alice", "color": "red"},
                {"id": "2", "name": "Bob", "color": "blue"},
            ],
        }
        self.assertEqual(parse_roster(json.dumps(doc)), ["Alice", "Bob"])

    def test_rejects_unknown_shapes(self):
        for bad in ('{"people": []}', "[1, 2]", "{broken"):
            with self.assertRaises(RuntimeError):
                parse_roster(bad)

    def test_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "roster.txt")
            with open(path, "w", encoding="utf-8") as f:
                f.write("Alice\nBob\n")
            self.assertEqual(load_roster_file(path), ["Alice", "Bob"])


class TestRosterClient(unittest.TestCase):
    def test_query_parameter_needs_no_request(self):
        def handler(request):
            raise AssertionError("no HTTP request expected")

        client = RosterClient(transport=httpx.MockTransport(handler))
        try:
            names = client.fetch_names("https://wheel.example/?participants=Alice,%20Bob,,Carol")
        finally:
            client.close()
        self.assertEqual(names, ["Alice", "Bob", "Carol"])

    def test_fetches_document(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json={"participants": ["Alice", "Bob"]})

        client = RosterClient(transport=httpx.MockTransport(handler))
        try:
            names = client.fetch_names("https://wheel.example/roster.json")
        finally:
            client.close()
        self.assertEqual(names, ["Alice", "Bob"])
        self.assertEqual(seen, ["https://wheel.example/roster.json"])

    def test_http_error_propagates(self):
        client = RosterClient(transport=httpx.MockTransport(lambda r: httpx.Response(404)))
        try:
            with self.assertRaises(httpx.HTTPStatusError):
                client.fetch_names("https://wheel.example/missing")
        finally:
            client.close()


if __name__ == "__main__":
    unittest.main()
