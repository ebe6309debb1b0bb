"""
User endpoints.
"""
from ..request import ErrorKind, HTTPMethod, Request, RequestDescriptor, register

USER_FIELDS = ('name', 'email', 'role', 'phone', 'organization_id', 'verified', 'active', 'external_id')


def _invalid_field(field: str, message: str, error: str = 'InvalidValue'):
    return {field: [{'description': f"{field.capitalize()}: {message}", 'error': error}]}


class _UserRequest(Request):

    @property
    def user_id(self) -> int:
        return int(self.params['user_id'])

    def user_url(self, user_id: int) -> str:
        return self.url_for(f"/users/{user_id}.json")


@register("get_current_user")
class GetCurrentUser(_UserRequest):
    descriptor = RequestDescriptor(
        method=HTTPMethod.GET,
        path=lambda r: "/users/me.json",
    )

    def mock(self):
        return self.mock_response({'user': self.client.backend.current_user()})


@register("get_user")
class GetUser(_UserRequest):
    descriptor = RequestDescriptor(
        method=HTTPMethod.GET,
        path=lambda r: f"/users/{r.user_id}.json",
    )

    def mock(self):
        return self.mock_response({'user': self.find('users', self.user_id)})


@register("get_users")
class GetUsers(_UserRequest):
    descriptor = RequestDescriptor(
        method=HTTPMethod.GET,
        path=lambda r: "/users.json",
        paginated=True,
    )

    def mock(self):
        return self.page('users')


@register("create_user")
class CreateUser(_UserRequest):
    descriptor = RequestDescriptor(
        method=HTTPMethod.POST,
        path=lambda r: "/users.json",
        body=lambda r: {'user': r.user_params},
    )

    @property
    def user_params(self) -> dict:
        return {key: value for key, value in self.params.get('user', {}).items() if key in USER_FIELDS}

    def mock(self):
        attributes = self.user_params
        if not attributes.get('name'):
            self.error(ErrorKind.INVALID, _invalid_field('name', 'cannot be blank', 'BlankValue'))

        email = attributes.get('email')
        if email and any(user.get('email') == email for user in self.data['users'].values()):
            self.error(ErrorKind.INVALID, _invalid_field('email', f"{email} is already being used by another user"))

        identity = self.data.serial_id()
        now = self.timestamp()
        record = {
            'id': identity,
            'url': self.user_url(identity),
            'created_at': now,
            'updated_at': now,
            'active': True,
            'role': 'end-user',
        }
        record.update(attributes)
        self.data.insert('users', record)

        return self.mock_response({'user': record}, status=201)


@register("update_user")
class UpdateUser(_UserRequest):
    descriptor = RequestDescriptor(
        method=HTTPMethod.PUT,
        path=lambda r: f"/users/{r.user_id}.json",
        body=lambda r: {'user': r.user_params},
    )

    @property
    def user_id(self) -> int:
        return int(self.params['user']['id'])

    @property
    def user_params(self) -> dict:
        return {key: value for key, value in self.params['user'].items() if key in USER_FIELDS}

    def mock(self):
        record = self.find('users', self.user_id)

        email = self.user_params.get('email')
        if email and any(user.get('email') == email and user['id'] != self.user_id
                         for user in self.data['users'].values()):
            self.error(ErrorKind.INVALID, _invalid_field('email', f"{email} is already being used by another user"))

        record.update(self.user_params)
        record['updated_at'] = self.timestamp()

        return self.mock_response({'user': record})


@register("destroy_user")
class DestroyUser(_UserRequest):
    descriptor = RequestDescriptor(
        method=HTTPMethod.DELETE,
        path=lambda r: f"/users/{r.user_id}.json",
    )

    def mock(self):
        record = self.delete('users', self.user_id)
        record['active'] = False
        return self.mock_response({'user': record})
