"""Export service: serialize a project to JSON."""

import json
import re
from datetime import datetime, timezone
from typing import Any

from ....errors import ValidationError

DEFAULT_SCENE_DURATION = 5

_UNSAFE_FILENAME = re.compile(r"[^\w\- ]+")


def _strip_assets(scene: dict[str, Any]) -> dict[str, Any]:
    illustrations = scene.get("illustrations")
    if not isinstance(illustrations, list):
        return scene
    return {
        **scene,
        "illustrations": [
            {k: v for k, v in ill.items() if k != "imageUrl"} if isinstance(ill, dict) else ill
            for ill in illustrations
        ],
    }


def build_metadata(project: dict[str, Any]) -> dict[str, Any]:
    scenes = project.get("scenes") or []
    return {
        "projectId": project.get("id"),
        "projectName": project.get("name") or "Untitled Project",
        "createdAt": project.get("createdAt"),
        "updatedAt": project.get("updatedAt"),
        "sceneCount": len(scenes),
        "totalDuration": sum(
            (scene.get("duration") or DEFAULT_SCENE_DURATION) for scene in scenes if isinstance(scene, dict)
        ),
    }


class ExportService:
    """Service for exporting projects."""

    def export_json(
        self,
        project: dict[str, Any] | None,
        version: str = "1.0.0",
        include_metadata: bool = False,
        include_assets: bool = False,
        pretty: bool = False,
    ) -> dict[str, Any]:
        """Build a JSON export of ``project``.

        Illustration ``imageUrl`` values are dropped unless ``include_assets``.
        The returned ``fileSize`` is the UTF-8 size of ``jsonString``.
        """
        if not project:
            raise ValidationError("Invalid project data")

        exported = dict(project)
        if not include_assets and isinstance(project.get("scenes"), list):
            exported["scenes"] = [
                _strip_assets(scene) if isinstance(scene, dict) else scene
                for scene in project["scenes"]
            ]

        data: dict[str, Any] = {
            "version": version,
            "exportedAt": datetime.now(timezone.utc).isoformat(),
        }
        if include_metadata:
            data["metadata"] = build_metadata(project)
        data["project"] = exported

        json_string = json.dumps(data, indent=2 if pretty else None, ensure_ascii=False)

        return {
            "success": True,
            "fileName": _file_name(project, "json"),
            "fileSize": len(json_string.encode("utf-8")),
            "data": data,
            "jsonString": json_string,
            "message": "JSON export generated successfully",
        }

    def export_pdf(
        self,
        project: dict[str, Any] | None,
        config: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Prepare the metadata the client needs to lay out a PDF storyboard.

        The PDF itself is drawn in the browser; this only validates the
        project and echoes it back with the layout options.

        Raises:
            ValidationError: If the project has no scenes.
        """
        scenes = project.get("scenes") if project else None
        if not isinstance(scenes, list) or not scenes:
            raise ValidationError("Invalid project data")

        config = config or {}
        return {
            "success": True,
            "fileName": _file_name(project, "pdf"),
            "metadata": {
                "projectId": project.get("id"),
                "projectName": project.get("name"),
                "sceneCount": len(scenes),
                "format": config.get("format"),
                "pageSize": config.get("pageSize"),
                "orientation": config.get("orientation"),
                "generatedAt": datetime.now(timezone.utc).isoformat(),
            },
            "projectData": project,
            "config": config,
            "message": "PDF generation configuration prepared",
        }


def _file_name(project: dict[str, Any], extension: str) -> str:
    name = _UNSAFE_FILENAME.sub("", str(project.get("name") or "")).strip() or "storyboard"
    return f"{name}_{int(datetime.now().timestamp() * 1000)}.{extension}"
