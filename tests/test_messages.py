from tests.conftest import auth_headers


def send(client, sender, recipient_id, content="Hello!", subject=None):
    payload = {"recipientId": recipient_id, "content": content}
    if subject is not None:
        payload["subject"] = subject
    return client.post("/messages", json=payload, headers=auth_headers(sender["token"]))


class TestSending:

    def test_send_message(self, client, student, teacher):
        response = send(client, student, teacher["id"], content="Can we meet?", subject="Homework")
        assert response.status_code == 201

        data = response.json()
        assert data["info"] == "Message sent successfully."
        message = data["message"]
        assert message["subject"] == "Homework"
        assert message["content"] == "Can we meet?"
        assert message["read"] is False
        assert message["sender"] == {"id": student["id"], "name": "Sam Student", "email": "sam@example.com"}
        assert message["recipient"]["id"] == teacher["id"]

    def test_subject_defaults(self, client, student, teacher):
        response = send(client, student, teacher["id"])
        assert response.json()["message"]["subject"] == "No Subject"

        response = send(client, student, teacher["id"], subject="")
        assert response.json()["message"]["subject"] == "No Subject"

    def test_cannot_message_self(self, client, student):
        response = send(client, student, student["id"])
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot send message to yourself."

    def test_unknown_recipient(self, client, student):
        response = send(client, student, 9999)
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_empty_content(self, client, student, teacher):
        response = send(client, student, teacher["id"], content="  ")
        assert response.status_code == 400

    def test_content_kept_verbatim(self, client, student, teacher):
        content = "    indented line\nsecond line\n\n"
        response = send(client, student, teacher["id"], content=content)
        assert response.status_code == 201
        assert response.json()["message"]["content"] == content

        inbox = client.get("/messages/my", headers=auth_headers(teacher["token"])).json()
        assert inbox[0]["content"] == content

    def test_missing_recipient(self, client, student):
        response = client.post("/messages", json={"content": "Hi"}, headers=auth_headers(student["token"]))
        assert response.status_code == 400

    def test_requires_token(self, client, teacher):
        response = client.post("/messages", json={"recipientId": teacher["id"], "content": "Hi"})
        assert response.status_code == 401


class TestListing:

    def test_lists_sent_and_received_newest_first(self, client, student, teacher, other_student):
        first = send(client, student, teacher["id"], content="first").json()["message"]
        second = send(client, teacher, student["id"], content="second").json()["message"]
        send(client, other_student, teacher["id"], content="unrelated")

        response = client.get("/messages/my", headers=auth_headers(student["token"]))
        assert response.status_code == 200
        assert [m["id"] for m in response.json()] == [second["id"], first["id"]]

        response = client.get("/messages/my", headers=auth_headers(teacher["token"]))
        assert [m["content"] for m in response.json()] == ["unrelated", "second", "first"]

    def test_empty_inbox(self, client, student):
        response = client.get("/messages/my", headers=auth_headers(student["token"]))
        assert response.status_code == 200
        assert response.json() == []


class TestMarkRead:

    def test_recipient_marks_read(self, client, student, teacher):
        message = send(client, student, teacher["id"]).json()["message"]

        response = client.put(f"/messages/{message['id']}/read", headers=auth_headers(teacher["token"]))
        assert response.status_code == 200

        data = response.json()
        assert data["message"] == "Message marked as read."
        assert data["updatedMessage"]["read"] is True

        # Marking again leaves it read
        response = client.put(f"/messages/{message['id']}/read", headers=auth_headers(teacher["token"]))
        assert response.json()["updatedMessage"]["read"] is True

    def test_sender_cannot_mark_read(self, client, student, teacher):
        message = send(client, student, teacher["id"]).json()["message"]

        response = client.put(f"/messages/{message['id']}/read", headers=auth_headers(student["token"]))
        assert response.status_code == 403

        inbox = client.get("/messages/my", headers=auth_headers(teacher["token"])).json()
        assert inbox[0]["read"] is False

    def test_missing_message(self, client, teacher):
        response = client.put("/messages/9999/read", headers=auth_headers(teacher["token"]))
        assert response.status_code == 404
