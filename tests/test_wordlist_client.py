import unittest
from unittest.mock import MagicMock, patch

import requests

from wordsquare.core.exceptions import DictionaryLoadError
from wordsquare.data.dictionary import Dictionary, DictionaryConfig, load_dictionary
from wordsquare.io.wordlist_client import WordListClient, WordListDownloadError


def fake_response(content: bytes) -> MagicMock:
    response = MagicMock()
    response.content = content
    response.raise_for_status.return_value = None
    return response


class WordListClientTests(unittest.TestCase):
    @patch("wordsquare.io.wordlist_client.requests.get")
    def test_fetch_returns_text(self, mock_get: MagicMock) -> None:
        mock_get.return_value = fake_response(b"Cat\ndog\n")
        client = WordListClient(timeout_seconds=5.0)

        text = client.fetch("https://example.com/words.txt")

        self.assertEqual(text, "Cat\ndog\n")
        mock_get.assert_called_once_with("https://example.com/words.txt", timeout=5.0)

    @patch("wordsquare.io.wordlist_client.requests.get")
    def test_network_failure_raises(self, mock_get: MagicMock) -> None:
        mock_get.side_effect = requests.ConnectionError("unreachable")
        with self.assertRaises(WordListDownloadError):
            WordListClient().fetch("https://example.com/words.txt")

    @patch("wordsquare.io.wordlist_client.requests.get")
    def test_http_error_raises(self, mock_get: MagicMock) -> None:
        response = fake_response(b"")
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        mock_get.return_value = response
        with self.assertRaises(WordListDownloadError):
            WordListClient().fetch("https://example.com/missing.txt")

    @patch("wordsquare.io.wordlist_client.requests.get")
    def test_non_utf8_body_raises(self, mock_get: MagicMock) -> None:
        mock_get.return_value = fake_response(b"\xff\xfe\xfa")
        with self.assertRaises(WordListDownloadError):
            WordListClient().fetch("https://example.com/words.bin")


class DictionaryFromUrlTests(unittest.TestCase):
    @patch("wordsquare.io.wordlist_client.requests.get")
    def test_from_url_builds_dictionary(self, mock_get: MagicMock) -> None:
        mock_get.return_value = fake_response(b"Lemon\nmelon\nlemon\n")
        dictionary = Dictionary.from_url("https://example.com/words.txt")
        self.assertEqual(sorted(dictionary.words), ["lemon", "melon"])

    @patch("wordsquare.io.wordlist_client.requests.get")
    def test_from_url_wraps_download_errors(self, mock_get: MagicMock) -> None:
        mock_get.side_effect = requests.Timeout("too slow")
        with self.assertRaises(DictionaryLoadError):
            Dictionary.from_url("https://example.com/words.txt")

    @patch("wordsquare.io.wordlist_client.requests.get")
    def test_load_dictionary_prefers_url(self, mock_get: MagicMock) -> None:
        mock_get.return_value = fake_response(b"abc\n")
        config = DictionaryConfig(path="/does/not/exist", url="https://example.com/words.txt")
        dictionary = load_dictionary(config)
        self.assertEqual(list(dictionary), ["abc"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
