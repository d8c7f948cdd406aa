from __future__ import annotations


DEFAULT_CONFIG: dict = {
    "source": {
        "images": "images",
        "labels": "labels",
        "image_extensions": ["jpg", "jpeg", "png", "JPG", "JPEG", "PNG"],
        "label_extensions": ["txt"],
    },
    "pairing": {
        "policy": "enumeration",
        "workers": 1,
    },
    "export": {
        "project_name": "ycat",
        "output_path": "output",
        "folder_paths": {
            "train": "train",
            "validation": "validation",
            "test": "test",
        },
        "class_map": {},
    },
    "monitoring": {
        "json_logs": False,
        "log_level": "INFO",
    },
    "report_path": "reports/catalog.json",
}
