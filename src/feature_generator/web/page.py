"""Single-page form served at ``/``."""

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Flutter Feature Generator</title>
  <style>
    body { font-family: sans-serif; max-width: 960px; margin: 2rem auto; color: #222; }
    .tag { margin-top: 1.5rem; font-weight: bold; }
    .endpoint { display: block; padding: 0.25rem 0; }
    .method { display: inline-block; width: 4.5rem; font-family: monospace; }
    .summary { color: #666; margin-left: 0.5rem; }
    fieldset { margin: 1rem 0; }
    #result { margin-top: 1rem; white-space: pre-wrap; }
    .error { color: #b00020; }
  </style>
</head>
<body>
  <h1>Flutter Feature Generator</h1>
  <label>Feature name
    <input id="featureName" placeholder="user_management" pattern="[a-z][a-z0-9_]*">
  </label>

  <fieldset>
    <legend>Layers</legend>
    <label><input type="checkbox" id="data" checked> Data</label>
    <label><input type="checkbox" id="domain" checked> Domain</label>
    <label><input type="checkbox" id="presentation" checked> Presentation</label>
    <label><input type="checkbox" id="bloc" checked> Bloc</label>
    <label><input type="checkbox" id="screens" checked> Screens</label>
    <label><input type="checkbox" id="widgets" checked> Widgets</label>
  </fieldset>

  <div id="endpoints">Loading endpoints...</div>
  <button id="generate">Generate</button>
  <div id="result"></div>

  <script>
    const checked = (id) => document.getElementById(id).checked;

    async function loadEndpoints() {
      const response = await fetch('/api/endpoints');
      const endpoints = await response.json();
      const container = document.getElementById('endpoints');
      container.innerHTML = '';
      let currentTag = null;
      for (const ep of endpoints) {
        if (ep.tag !== currentTag) {
          currentTag = ep.tag;
          const header = document.createElement('div');
          header.className = 'tag';
          header.textContent = currentTag;
          container.appendChild(header);
        }
        const label = document.createElement('label');
        label.className = 'endpoint';
        label.innerHTML = `<input type="checkbox" value="${ep.index}"> ` +
          `<span class="method">${ep.method}</span>${ep.path}` +
          `<span class="summary">${ep.summary || ''}</span>`;
        container.appendChild(label);
      }
    }

    async function generate() {
      const selectedIndices = [...document.querySelectorAll('#endpoints input:checked')]
        .map((box) => Number(box.value));
      const body = {
        featureName: document.getElementById('featureName').value.trim(),
        selectedIndices,
        layers: {
          data: checked('data'),
          domain: checked('domain'),
          presentation: checked('presentation'),
          presentationComponents: {
            bloc: checked('bloc'),
            screens: checked('screens'),
            widgets: checked('widgets'),
          },
        },
      };
      const response = await fetch('/api/generate', {
        method: 'POST',
        headers: { 'Content-Type': 'application/json' },
        body: JSON.stringify(body),
      });
      const payload = await response.json();
      const result = document.getElementById('result');
      result.className = response.ok ? '' : 'error';
      result.textContent = response.ok
        ? `${payload.message}\\n${payload.endpointCount} endpoint(s) in ${payload.location}`
        : payload.error;
    }

    document.getElementById('generate').addEventListener('click', generate);
    loadEndpoints();
  </script>
</body>
</html>
"""
