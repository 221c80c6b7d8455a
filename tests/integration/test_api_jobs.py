from conftest import post_job


def test_employer_posts_and_lists_jobs(client, employer) -> None:
    job_id = post_job(
        client,
        employer["headers"],
        category="",
        applicationDeadline="2026-12-31",
        tags={"remoteJobs": True, "fastHiring": True},
    )

    listing = client.get("/api/jobs")
    assert listing.status_code == 200
    jobs = listing.json()
    assert [job["id"] for job in jobs] == [job_id]
    job = jobs[0]
    assert job["posted_by"] == employer["id"]
    assert job["category"] == "Others"
    assert job["remote_job"] is True
    assert job["fast_hiring"] is True
    assert job["part_time"] is False
    assert job["application_deadline"] == "2026-12-31"

    single = client.get(f"/api/jobs/{job_id}")
    assert single.status_code == 200
    assert single.json()["title"] == "Backend Engineer"


def test_jobs_list_newest_first(client, employer) -> None:
    first = post_job(client, employer["headers"], title="First")
    second = post_job(client, employer["headers"], title="Second")
    ids = [job["id"] for job in client.get("/api/jobs").json()]
    assert ids == [second, first]


def test_only_employers_post_jobs(client, seeker) -> None:
    resp = client.post(
        "/api/jobs",
        json={"title": "x", "company": "y", "location": "z", "description": "d"},
        headers=seeker["headers"],
    )
    assert resp.status_code == 403


def test_post_job_requires_core_fields(client, employer) -> None:
    resp = client.post("/api/jobs", json={"title": "x"}, headers=employer["headers"])
    assert resp.status_code == 400


def test_unknown_job_is_404(client) -> None:
    assert client.get("/api/jobs/999").status_code == 404


def test_malformed_job_id_is_bad_request(client) -> None:
    for raw in ("abc", "0", "-3"):
        resp = client.get(f"/api/jobs/{raw}")
        assert resp.status_code == 400
        assert resp.json() == {"message": "Invalid job id"}


def test_health_reports_database(client) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"server": "ok", "db": "connected"}
