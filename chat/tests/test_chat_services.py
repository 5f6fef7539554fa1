from django.contrib.auth import get_user_model
from django.test import TestCase

from chat.models import ChatRoom, Message
from chat.services import find_chat_room, get_or_create_chat_room, post_system_message
from orders.models import Order

User = get_user_model()


class ChatServiceTests(TestCase):
    def setUp(self):
        self.client_user = User.objects.create_user("client", "c@example.com", "pass1234")
        self.exe = User.objects.create_user("exe", "e@example.com", "pass1234")
        self.order = Order.objects.create(client=self.client_user, title="Logo", description="d")

    def test_get_or_create_is_idempotent(self):
        first = get_or_create_chat_room(self.order, self.exe)
        second = get_or_create_chat_room(self.order, self.exe)
        self.assertEqual(first.pk, second.pk)
        self.assertEqual(ChatRoom.objects.count(), 1)
        self.assertEqual(first.client_id, self.client_user.id)

    def test_find_room_needs_assigned_executor(self):
        get_or_create_chat_room(self.order, self.exe)
        self.assertIsNone(find_chat_room(self.order))
        self.order.executor = self.exe
        self.assertIsNotNone(find_chat_room(self.order))

    def test_system_message_touches_room(self):
        room = get_or_create_chat_room(self.order, self.exe)
        post_system_message(room, self.client_user, "Work has started.")
        room.refresh_from_db()
        self.assertIsNotNone(room.last_message_at)
        message = Message.objects.get(room=room)
        self.assertTrue(message.is_system)
        self.assertFalse(message.is_read)
