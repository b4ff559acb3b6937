from unittest import TestCase
from ballotbox.db.encoder import encode, decode, MONGO_MAX_INT, MONGO_MIN_INT
from datetime import datetime, timezone


class TestEncode(TestCase):
    def test_int_to_str(self):
        i = 1000
        b = '1000'

        self.assertEqual(encode(i), b)

    def test_str_to_json(self):
        s = 'hello'
        b = '"hello"'

        self.assertEqual(encode(s), b)

    def test_bool_is_not_treated_as_int(self):
        self.assertEqual(encode(True), 'true')
        self.assertEqual(encode({'voted': False}), '{"voted":false}')

    def test_decode_int(self):
        b = '1234'
        i = 1234

        self.assertEqual(decode(b), i)

    def test_decode_str(self):
        b = '"howdy"'
        s = 'howdy'

        self.assertEqual(decode(b), s)

    def test_decode_failure(self):
        b = 'xwow'

        self.assertIsNone(decode(b))

    def test_decode_none(self):
        self.assertIsNone(decode(None))

    def test_date_encode(self):
        d = datetime(2019, 1, 1, tzinfo=timezone.utc)

        _d = encode(d)

        self.assertEqual(_d, '{"__time__":"2019-01-01T00:00:00+00:00"}')

    def test_date_decode(self):
        _d = '{"__time__": "2019-01-01T00:00:00+00:00"}'

        d = decode(_d)

        self.assertEqual(datetime(2019, 1, 1, tzinfo=timezone.utc), d)

    def test_big_int_encode(self):
        self.assertEqual(encode(MONGO_MAX_INT + 1), '{"__big_int__":"%d"}' % (MONGO_MAX_INT + 1))
        self.assertEqual(encode(MONGO_MIN_INT), '{"__big_int__":"%d"}' % MONGO_MIN_INT)

    def test_big_int_in_dict_encode(self):
        _d = encode({'vote_count': MONGO_MAX_INT, 'name': 'Alice'})

        self.assertEqual(_d, '{"vote_count":{"__big_int__":"%d"},"name":"Alice"}' % MONGO_MAX_INT)

    def test_big_int_decode(self):
        self.assertEqual(decode('{"__big_int__":"%d"}' % (MONGO_MAX_INT + 5)), MONGO_MAX_INT + 5)

    def test_voter_record_encode_decode(self):
        record = {'registered': True, 'voted': True, 'candidate_id': 2}

        self.assertDictEqual(decode(encode(record)), record)

    def test_none_in_record(self):
        record = {'registered': True, 'voted': False, 'candidate_id': None}

        self.assertEqual(encode(record), '{"registered":true,"voted":false,"candidate_id":null}')
