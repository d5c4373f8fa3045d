"""
test_fetch.py
=============
Tests for locating and downloading the Storm Data file. The network is mocked.
"""

import os
import tempfile
import unittest
from unittest import mock

import requests

from stormrank import fetch
from stormrank.fetch import BZ2_NAME, CSV_NAME, download_file, ensure_storm_data


def fake_response(chunks=(b"abc", b"", b"def"), status_error=None):
    resp = mock.MagicMock()
    resp.__enter__.return_value = resp
    resp.__exit__.return_value = False
    resp.iter_content.return_value = iter(chunks)
    if status_error is not None:
        resp.raise_for_status.side_effect = status_error
    return resp


class TestEnsureStormData(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = self.tmp.name

    def tearDown(self):
        self.tmp.cleanup()

    def touch(self, name):
        path = os.path.join(self.dir, name)
        with open(path, "wb") as f:
            f.write(b"x")
        return path

    @mock.patch("stormrank.fetch.requests.get")
    def test_existing_csv_preferred(self, get):
        self.touch(BZ2_NAME)
        csv_path = self.touch(CSV_NAME)
        self.assertEqual(ensure_storm_data(self.dir), csv_path)
        get.assert_not_called()

    @mock.patch("stormrank.fetch.requests.get")
    def test_existing_bz2(self, get):
        bz2_path = self.touch(BZ2_NAME)
        self.assertEqual(ensure_storm_data(self.dir), bz2_path)
        get.assert_not_called()

    @mock.patch("stormrank.fetch.requests.get")
    def test_downloads_when_missing(self, get):
        get.return_value = fake_response()
        target = os.path.join(self.dir, "new")
        path = ensure_storm_data(target, url="http://example.invalid/storm.csv.bz2")
        self.assertEqual(path, os.path.join(target, BZ2_NAME))
        with open(path, "rb") as f:
            self.assertEqual(f.read(), b"abcdef")
        get.assert_called_once_with("http://example.invalid/storm.csv.bz2",
                                    timeout=fetch.TIMEOUT, stream=True)


class TestDownloadRetry(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "out.bin")

    def tearDown(self):
        self.tmp.cleanup()

    @mock.patch("stormrank.fetch.time.sleep")
    @mock.patch("stormrank.fetch.requests.get")
    def test_retry_then_success(self, get, sleep):
        get.side_effect = [requests.ConnectionError("down"), fake_response()]
        self.assertEqual(download_file("http://x", self.path), self.path)
        sleep.assert_called_once_with(1)
        self.assertFalse(os.path.exists(self.path + ".part"))

    @mock.patch("stormrank.fetch.time.sleep")
    @mock.patch("stormrank.fetch.requests.get")
    def test_gives_up(self, get, sleep):
        get.return_value = fake_response(status_error=requests.HTTPError("503"))
        with self.assertRaises(requests.HTTPError):
            download_file("http://x", self.path, max_retry=2)
        self.assertEqual(get.call_count, 3)
        self.assertEqual([c.args[0] for c in sleep.call_args_list], [1, 2])
        self.assertFalse(os.path.exists(self.path))
        self.assertFalse(os.path.exists(self.path + ".part"))


if __name__ == "__main__":
    unittest.main()
