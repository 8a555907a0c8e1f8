"""Profile updates."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User


@storefront.command(part_of="User")
class UpdateProfile:
    user_id = Identifier(required=True)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    age = Integer(min_value=0, max_value=150)
    profile_image = String(max_length=500)


@storefront.command_handler(part_of=User)
class UpdateProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_profile(
            first_name=command.first_name,
            last_name=command.last_name,
            age=command.age,
            profile_image=command.profile_image,
        )
        repo.add(user)
        return user.to_payload()
