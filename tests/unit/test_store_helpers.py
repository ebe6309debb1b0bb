from helpdesk_client.api_client import MockDataStore
from helpdesk_client.exceptions import HelpdeskError, InvalidRecordError, NotFoundError
from helpdesk_client.request import ErrorKind, HTTPMethod, Request, RequestDescriptor

from .base import BaseMockTest


class ListWidgets(Request):
    descriptor = RequestDescriptor(method=HTTPMethod.GET, path=lambda r: "/widgets.json")


class TestMockDataStore(BaseMockTest):
    """Test the in-memory data store itself."""

    def test_collections_are_created_on_access(self):
        self.assertNotIn('widgets', self.store)
        self.assertEqual(self.store['widgets'], {})
        self.assertIn('widgets', self.store)

    def test_initial_collections_are_keyed_by_int(self):
        store = MockDataStore({'users': {'3': {'id': 3, 'name': 'Ada'}}})
        self.assertEqual(store['users'][3]['name'], 'Ada')

    def test_insert_allocates_unused_ids(self):
        self.store.insert('users', {'id': 1, 'name': 'taken'})
        record = self.store.insert('users', {'name': 'new'})
        self.assertEqual(record['id'], 2)
        self.assertIs(self.store['users'][2], record)

    def test_reset_drops_everything(self):
        self.seed_users(3)
        self.store.last_request = {'user': {}}
        self.store.reset()

        self.assertEqual(list(self.store), [])
        self.assertIsNone(self.store.last_request)
        self.assertEqual(self.store.serial_id(), 1)


class TestFindAndDelete(BaseMockTest):
    """Test record lookup and removal helpers."""

    def setUp(self):
        super().setUp()
        self.seed_users(2)
        self.request = ListWidgets(self.client)

    def test_find_returns_the_record(self):
        record = self.request.find('users', 2)
        self.assertEqual(record['name'], 'user-2')

    def test_find_accepts_string_identity(self):
        self.assertEqual(self.request.find('users', '1')['id'], 1)

    def test_find_missing_raises_not_found(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.request.find('users', 99)

        error = ctx.exception
        self.assertIsInstance(error, HelpdeskError)
        self.assertEqual(error.status, 404)
        self.assertEqual(error.body, {'error': 'RecordNotFound', 'description': 'Not found'})
        self.assertEqual(error.response.url, 'https://acme.example.com/api/v2/widgets.json')

    def test_find_non_numeric_identity_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            self.request.find('users', 'abc')

    def test_find_merges_details(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.request.find('users', 99, details={'user': 'missing'})
        self.assertEqual(ctx.exception.body['details'], {'user': 'missing'})

    def test_find_with_alternate_error_kind(self):
        with self.assertRaises(InvalidRecordError) as ctx:
            self.request.find('users', 99, error=ErrorKind.INVALID)
        self.assertEqual(ctx.exception.status, 422)
        self.assertEqual(ctx.exception.body['error'], 'RecordInvalid')

    def test_details_do_not_leak_into_the_catalog(self):
        with self.assertRaises(NotFoundError):
            self.request.find('users', 99, details={'user': 'missing'})
        with self.assertRaises(NotFoundError) as ctx:
            self.request.find('users', 98)
        self.assertNotIn('details', ctx.exception.body)

    def test_delete_removes_the_record(self):
        record = self.request.delete('users', 1)
        self.assertEqual(record['name'], 'user-1')

        with self.assertRaises(NotFoundError):
            self.request.find('users', 1)

    def test_delete_missing_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            self.request.delete('users', 42)


class TestResources(BaseMockTest):
    """Test the list body helper."""

    def test_named_collection_uses_its_name_as_root(self):
        self.seed_users(3)
        response = ListWidgets(self.client).resources('users')

        self.assertEqual(response.status, 200)
        self.assertEqual(response.body['count'], 3)
        self.assertEqual([u['id'] for u in response.body['users']], [1, 2, 3])

    def test_literal_list_without_root_omits_the_key(self):
        response = ListWidgets(self.client).resources([{'id': 1}, {'id': 2}])
        self.assertEqual(response.body, {'count': 2})

    def test_literal_list_with_root(self):
        response = ListWidgets(self.client).resources([{'id': 1}], root='widgets')
        self.assertEqual(response.body, {'widgets': [{'id': 1}], 'count': 1})

    def test_root_can_be_suppressed(self):
        self.seed_users(1)
        response = ListWidgets(self.client).resources('users', root=False)
        self.assertEqual(response.body, {'count': 1})
