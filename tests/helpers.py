import json
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from modpak.api.http import HttpResponse
from modpak.exceptions import APIError
from modpak.prompt import Prompter

MR = "https://api.modrinth.com/v2"
CF = "https://api.curseforge.com/v1"

Route = Union[Any, Callable[[Optional[dict]], Any]]


class FakeHttp:
    """按 URL 返回预设响应的 HttpClient 替身，未登记的 URL 返回 404"""

    def __init__(self):
        self.routes: Dict[str, tuple] = {}
        self.failures: set = set()
        self.calls: List[tuple] = []

    def add(self, url: str, payload: Route = None, status: int = 200, raw: bytes = None):
        self.routes[url] = (payload, status, raw)

    def fail(self, url: str):
        self.failures.add(url)

    def count(self, url: str) -> int:
        return sum(1 for called, _params, _headers in self.calls if called == url)

    async def get(self, url, headers=None, params=None) -> HttpResponse:
        self.calls.append((url, params, headers))
        if url in self.failures:
            raise APIError("连接被拒绝", url=url)
        if url not in self.routes:
            return HttpResponse(status=404, body=b'{"error": "not_found"}', url=url)

        payload, status, raw = self.routes[url]
        if raw is not None:
            return HttpResponse(status=status, body=raw, url=url)
        if callable(payload):
            payload = payload(params)
        return HttpResponse(status=status, body=json.dumps(payload).encode(), url=url)

    async def close(self):
        pass


class ScriptedPrompter(Prompter):
    """按顺序返回预设回答，回答用完后返回空字符串"""

    def __init__(self, answers: Optional[Iterable[str]] = None):
        self.answers: List[str] = list(answers or [])
        self.questions: List[str] = []
        self.output: List[str] = []

    def ask(self, message: str) -> str:
        self.questions.append(message)
        if not self.answers:
            return ""
        return self.answers.pop(0)

    def echo(self, message: str = ""):
        self.output.append(message)


def mr_project(pid, slug, title=None, client_side="required", server_side="required"):
    return {
        "id": pid,
        "slug": slug,
        "title": title or slug.title(),
        "client_side": client_side,
        "server_side": server_side,
        "project_type": "mod",
    }


def mr_file(filename, url=None, hashes=None):
    return {
        "filename": filename,
        "url": url or f"https://cdn.modrinth.com/data/{filename}",
        "size": 1024,
        "hashes": hashes if hashes is not None else {"sha1": "a" * 40, "sha512": "b" * 128},
    }


def mr_version(vid, project_id, number, files, deps=(), version_type="release", date="2024-01-01T00:00:00Z"):
    return {
        "id": vid,
        "project_id": project_id,
        "name": f"{number}",
        "version_number": number,
        "version_type": version_type,
        "date_published": date,
        "files": list(files),
        "dependencies": [
            {"project_id": d[0], "version_id": d[1] if len(d) > 1 else None, "dependency_type": d[2] if len(d) > 2 else "required"}
            for d in deps
        ],
    }


def cf_mod(mid, slug, name=None):
    return {"id": mid, "slug": slug, "name": name or slug.title(), "links": {}}


def cf_file(fid, filename, game_versions, download_url="auto", release_type=1, deps=()):
    return {
        "id": fid,
        "displayName": filename.replace(".jar", ""),
        "fileName": filename,
        "fileLength": 2048,
        "downloadUrl": (
            f"https://edge.forgecdn.net/files/{fid}/{filename}"
            if download_url == "auto"
            else download_url
        ),
        "releaseType": release_type,
        "fileDate": "2024-02-02T00:00:00Z",
        "hashes": [{"value": "c" * 40, "algo": 1}, {"value": "d" * 32, "algo": 2}],
        "gameVersions": list(game_versions),
        "dependencies": [{"modId": m, "relationType": r} for m, r in deps],
    }
