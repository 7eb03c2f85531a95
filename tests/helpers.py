"""테스트용 디스코드 객체 대역"""
from unittest.mock import AsyncMock, MagicMock

import discord

VERIFIED_ROLE_ID = 111
UNVERIFIED_ROLE_ID = 222


class FakeMember:
    """역할/닉네임 변경을 기록하는 디스코드 멤버 대역"""

    def __init__(self, member_id=1001, roles=(), nick=None, name='tester'):
        self.id = member_id
        self.name = name
        self.nick = nick
        self.role_ids = set(roles)
        self.edit = AsyncMock(side_effect=self._edit)
        self.add_roles = AsyncMock(side_effect=self._add_roles)
        self.remove_roles = AsyncMock(side_effect=self._remove_roles)
        self.send = AsyncMock()
        self.display_avatar = MagicMock(url='https://cdn.example.com/avatar.png')
        self.guild = MagicMock()

    async def _edit(self, nick=None, reason=None):
        self.nick = nick

    async def _add_roles(self, *roles, reason=None):
        self.role_ids.update(role.id for role in roles)

    async def _remove_roles(self, *roles, reason=None):
        self.role_ids.difference_update(role.id for role in roles)

    def get_role(self, role_id):
        if role_id in self.role_ids:
            return MagicMock(id=role_id)
        return None

    def __str__(self):
        return self.name


def make_interaction(user):
    interaction = MagicMock()
    interaction.user = user
    interaction.response.send_message = AsyncMock()
    interaction.response.send_modal = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.response.edit_message = AsyncMock()
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.followup.send = AsyncMock()
    return interaction


def http_error(cls=discord.Forbidden, status=403):
    return cls(MagicMock(status=status, reason='Forbidden'), 'Missing Permissions')
