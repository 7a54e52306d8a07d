"""Deterministic offline responder used when no provider is available.

Each snippet is syntactically valid for its language and embeds the original
prompt, so a degraded result can be traced back to the request.
"""

import json

import constants
from models.responses import GenerationResult

PROMPT_PLACEHOLDER = "__PROMPT__"

OFFLINE_SNIPPETS = {
    "html": """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Generated App</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; margin: 0; padding: 20px; }
        .container { max-width: 800px; margin: 0 auto; }
        .card { background: white; border-radius: 8px; box-shadow: 0 2px 10px rgba(0,0,0,0.1); padding: 20px; margin: 20px 0; }
        button { background: #007bff; color: white; border: none; padding: 10px 20px; border-radius: 5px; cursor: pointer; }
        button:hover { background: #0056b3; }
    </style>
</head>
<body>
    <div class="container">
        <h1>Generated Application</h1>
        <div class="card">
            <p>This is a demo response for: __PROMPT__</p>
            <button onclick="alert('Hello from generated code!')">Click Me</button>
        </div>
    </div>
</body>
</html>""",
    "typescript": """interface AppConfig {
    name: string;
    version: string;
}

class Application {
    private config: AppConfig;

    constructor(config: AppConfig) {
        this.config = config;
    }

    public initialize(): void {
        console.log(`Initializing ${this.config.name} v${this.config.version}`);
        // Application logic for: __PROMPT__
    }

    public run(): void {
        this.initialize();
        console.log('Application is running...');
    }
}

const app = new Application({
    name: 'Generated App',
    version: '1.0.0'
});

app.run();""",
    "javascript": """// Generated JavaScript for: __PROMPT__
class App {
    constructor() {
        this.initialize();
    }

    initialize() {
        console.log('App initialized');
        this.setupEventListeners();
    }

    setupEventListeners() {
        document.addEventListener('DOMContentLoaded', () => {
            console.log('DOM loaded, app ready');
        });
    }

    run() {
        console.log('App is running...');
    }
}

const app = new App();
app.run();""",
    "python": '''#!/usr/bin/env python3
"""
Generated Python application for: __PROMPT__
"""


class Application:
    def __init__(self):
        self.name = "Generated App"
        self.version = "1.0.0"

    def initialize(self):
        """Initialize the application"""
        print(f"Initializing {self.name} v{self.version}")

    def run(self):
        """Run the application"""
        self.initialize()
        print("Application is running...")


if __name__ == "__main__":
    app = Application()
    app.run()''',
    "css": """/* Generated CSS for: __PROMPT__ */
:root {
    --primary-color: #007bff;
    --secondary-color: #6c757d;
    --background: #f8f9fa;
    --text: #212529;
    --border: #dee2e6;
}

* {
    margin: 0;
    padding: 0;
    box-sizing: border-box;
}

body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
    background: var(--background);
    color: var(--text);
    line-height: 1.6;
}

.container {
    max-width: 1200px;
    margin: 0 auto;
    padding: 20px;
}

@media (max-width: 768px) {
    .container {
        padding: 10px;
    }
}""",
    "json": """{
  "name": "Generated Configuration",
  "description": __PROMPT__,
  "version": "1.0.0",
  "settings": {
    "theme": "default",
    "language": "en",
    "features": {
      "darkMode": true,
      "notifications": true,
      "autoSave": false
    }
  }
}""",
    "markdown": """# Generated Documentation

## Overview

This document was generated for: **__PROMPT__**

## Features

- Modern design
- Responsive layout
- Accessibility support

## Usage

```bash
npm install
npm start
```
""",
}

GENERIC_OFFLINE_SNIPPET = (
    "// Generated __LANGUAGE__ code for: __PROMPT__\nconsole.log('Hello, World!');"
)


def escape_prompt(prompt: str, language: str) -> str:
    """Make the prompt safe to embed into snippet for given language."""
    match language:
        case "json":
            return json.dumps(prompt, ensure_ascii=False)
        case "python":
            return prompt.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
        case "css":
            return prompt.replace("*/", "* /")
        case "html":
            return prompt.replace("<", "&lt;").replace(">", "&gt;")
        case "javascript" | "typescript":
            return " ".join(prompt.splitlines())
    return prompt


def offline_snippet(prompt: str, language: str) -> str:
    """Return canned snippet for given language embedding the prompt."""
    language = language.lower()
    snippet = OFFLINE_SNIPPETS.get(language)
    if snippet is None:
        return GENERIC_OFFLINE_SNIPPET.replace("__LANGUAGE__", language).replace(
            PROMPT_PLACEHOLDER, " ".join(prompt.splitlines())
        )
    return snippet.replace(PROMPT_PLACEHOLDER, escape_prompt(prompt, language))


def offline_result(prompt: str, language: str, model_id: str) -> GenerationResult:
    """Return degraded generation result produced without any provider."""
    return GenerationResult(
        code=offline_snippet(prompt, language),
        language=language,
        explanation="No code generation provider is available, showing a demo response.",
        provider_used=constants.OFFLINE_PROVIDER_ID,
        model_used=model_id,
        degraded=True,
    )
