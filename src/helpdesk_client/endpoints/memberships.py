"""
Organization membership endpoints.
"""
from ..request import ErrorKind, ErrorSpec, HTTPMethod, Request, RequestDescriptor, error_catalog, register

MEMBERSHIP_ERRORS = error_catalog({
    ErrorKind.CONFLICT: ErrorSpec(422, {
        'error': 'RecordInvalid',
        'description': 'Record validation errors',
        'details': {'user_id': [{'description': 'User has already been taken', 'error': 'DuplicateValue'}]},
    }),
})


@register("get_user_memberships")
class GetUserMemberships(Request):
    descriptor = RequestDescriptor(
        method=HTTPMethod.GET,
        path=lambda r: f"/users/{r.user_id}/organization_memberships.json",
        paginated=True,
    )

    @property
    def user_id(self) -> int:
        return int(self.params['membership']['user_id'])

    def mock(self):
        memberships = [m for m in self.data['memberships'].values() if m['user_id'] == self.user_id]
        return self.page(memberships, root='organization_memberships')


@register("get_membership")
class GetMembership(Request):
    descriptor = RequestDescriptor(
        method=HTTPMethod.GET,
        path=lambda r: f"/organization_memberships/{r.membership_id}.json",
        errors=MEMBERSHIP_ERRORS,
    )

    @property
    def membership_id(self) -> int:
        return int(self.params['membership']['id'])

    def mock(self):
        return self.mock_response({'organization_membership': self.find('memberships', self.membership_id)})


@register("create_membership")
class CreateMembership(Request):
    descriptor = RequestDescriptor(
        method=HTTPMethod.POST,
        path=lambda r: "/organization_memberships.json",
        body=lambda r: {'organization_membership': r.membership_params},
        errors=MEMBERSHIP_ERRORS,
    )

    @property
    def membership_params(self) -> dict:
        membership = self.params['membership']
        return {
            'user_id': int(membership['user_id']),
            'organization_id': int(membership['organization_id']),
        }

    def mock(self):
        attributes = self.membership_params
        user_id = attributes['user_id']
        organization_id = attributes['organization_id']

        self.find('users', user_id, error=ErrorKind.INVALID,
                  details={'user': [{'description': 'User cannot be blank', 'error': 'BlankValue'}]})
        self.find('organizations', organization_id, error=ErrorKind.INVALID,
                  details={'organization': [{'description': 'Organization cannot be blank', 'error': 'BlankValue'}]})

        if any(m['user_id'] == user_id and m['organization_id'] == organization_id
               for m in self.data['memberships'].values()):
            self.error(ErrorKind.CONFLICT)

        identity = self.data.serial_id()
        now = self.timestamp()
        record = {
            'id': identity,
            'url': self.url_for(f"/organization_memberships/{identity}.json"),
            'user_id': user_id,
            'organization_id': organization_id,
            'default': not any(m['user_id'] == user_id for m in self.data['memberships'].values()),
            'created_at': now,
            'updated_at': now,
        }
        self.data.insert('memberships', record)

        return self.mock_response({'organization_membership': record}, status=201)


@register("destroy_membership")
class DestroyMembership(Request):
    descriptor = RequestDescriptor(
        method=HTTPMethod.DELETE,
        path=lambda r: f"/organization_memberships/{r.membership_id}.json",
        errors=MEMBERSHIP_ERRORS,
    )

    @property
    def membership_id(self) -> int:
        return int(self.params['membership']['id'])

    def mock(self):
        self.delete('memberships', self.membership_id)
        return self.mock_response(None, status=204)
