def make_patient(client, **overrides):
    payload = {"firstName": "Ana", "lastName": "Popescu", "phone": "0722123456", "email": "ana@example.com"}
    payload.update(overrides)
    resp = client.post("/api/patients", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def make_appointment(client, when: str, **overrides):
    payload = {
        "firstName": "Ion",
        "lastName": "Ionescu",
        "phone": "0733000111",
        "appointmentDate": when,
        "purpose": "control",
    }
    payload.update(overrides)
    resp = client.post("/api/appointments", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def make_record(client, patient_id: int, **overrides):
    payload = {
        "patientId": patient_id,
        "condition": "carie",
        "treatment": "obturatie compozit",
        "visitDate": "2026-10-05T10:00:00",
    }
    payload.update(overrides)
    resp = client.post("/api/medical-records", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def make_message(client, **overrides):
    payload = {
        "name": "Maria",
        "email": "maria@example.com",
        "subject": "Programare",
        "message": "Buna ziua, as dori o programare.",
    }
    payload.update(overrides)
    resp = client.post("/api/messages", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()
