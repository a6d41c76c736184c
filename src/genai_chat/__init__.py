"""Chat backend relaying conversations to Ollama or the Cloudflare AI gateway."""
