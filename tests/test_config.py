#!/usr/bin/env python3
"""
Tests for loading the relay configuration from environment variables.
"""

import os
import sys
import unittest
from dataclasses import FrozenInstanceError

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nightbot_clip.config import RelayConfig


class TestRelayConfig(unittest.TestCase):

    def test_defaults_from_empty_environment(self):
        config = RelayConfig.from_env({})

        self.assertIsNone(config.client_id)
        self.assertEqual(config.port, 3000)
        self.assertEqual(config.response_format, 'text')
        self.assertEqual(config.auth_mode, 'legacy')
        self.assertEqual(config.resolve_delay_ms, 5000)
        self.assertEqual(config.resolve_delay, 5.0)
        self.assertEqual(config.lookup_attempts, 1)
        self.assertEqual(config.twitch_api_base, 'https://api.twitch.tv/helix')
        self.assertEqual(config.missing_credentials(), ['CLIENT_ID', 'ACCESS_TOKEN', 'BROADCASTER_ID'])
        self.assertFalse(config.has_credentials)

    def test_reads_credentials_and_options(self):
        config = RelayConfig.from_env({
            'CLIENT_ID': ' abc ',
            'ACCESS_TOKEN': 'token',
            'BROADCASTER_ID': '12345',
            'CHANNEL_NAME': 'StreamerName',
            'PORT': '8080',
            'RESPONSE_FORMAT': 'JSON',
            'CLIP_AUTH_MODE': 'strict',
            'CLIP_RESOLVE_DELAY_MS': '2500',
            'CLIP_LOOKUP_ATTEMPTS': '3',
            'TWITCH_API_BASE': 'https://example.test/helix/',
            'log_level': 'ignored',
        })

        self.assertEqual(config.client_id, 'abc')
        self.assertTrue(config.has_credentials)
        self.assertEqual(config.channel_name, 'StreamerName')
        self.assertEqual(config.port, 8080)
        self.assertEqual(config.response_format, 'json')
        self.assertEqual(config.auth_mode, 'strict')
        self.assertEqual(config.resolve_delay, 2.5)
        self.assertEqual(config.lookup_attempts, 3)
        self.assertEqual(config.twitch_api_base, 'https://example.test/helix')
        self.assertEqual(config.log_level, 'INFO')

    def test_blank_values_count_as_missing(self):
        config = RelayConfig.from_env({'CLIENT_ID': '', 'ACCESS_TOKEN': '   ', 'BROADCASTER_ID': '1'})

        self.assertEqual(config.missing_credentials(), ['CLIENT_ID', 'ACCESS_TOKEN'])

    def test_invalid_values_fall_back_to_defaults(self):
        with self.assertLogs('nightbot_clip.config', level='WARNING'):
            config = RelayConfig.from_env({
                'PORT': 'eighty',
                'RESPONSE_FORMAT': 'xml',
                'CLIP_AUTH_MODE': 'open',
                'CLIP_LOOKUP_ATTEMPTS': '0',
                'TWITCH_REQUEST_TIMEOUT': '-1',
            })

        self.assertEqual(config.port, 3000)
        self.assertEqual(config.response_format, 'text')
        self.assertEqual(config.auth_mode, 'legacy')
        self.assertEqual(config.lookup_attempts, 1)
        self.assertEqual(config.request_timeout, 10.0)

    def test_config_is_immutable(self):
        config = RelayConfig.from_env({'CLIENT_ID': 'abc'})

        with self.assertRaises(FrozenInstanceError):
            config.client_id = 'other'


if __name__ == '__main__':
    unittest.main()
