"""Same-origin proxy that injects the Perplexity API key server-side."""
