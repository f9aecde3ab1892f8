from __future__ import annotations

WEB_UI_HTML = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>curl Tester</title>
  <style>
    :root {
      --bg: #f5f7fb;
      --panel: #ffffff;
      --text: #162334;
      --muted: #5d6f84;
      --border: #d6dce5;
      --accent: #1653b5;
      --accent-soft: #dbe8ff;
      --ok: #0f7a42;
      --warn: #9a5b00;
      --err: #b82727;
    }

    * {
      box-sizing: border-box;
    }

    body {
      margin: 0;
      background: radial-gradient(1000px 600px at 5% -20%, #dbe8ff 0%, var(--bg) 60%);
      color: var(--text);
      font-family: "IBM Plex Sans", "Segoe UI", Arial, sans-serif;
      line-height: 1.45;
    }

    header {
      padding: 0.8rem 1.25rem;
      border-bottom: 1px solid var(--border);
      background: linear-gradient(120deg, #ecf3ff, #ffffff);
    }

    header h1 {
      margin: 0;
      font-size: 1.25rem;
    }

    header p {
      margin: 0.2rem 0 0;
      color: var(--muted);
      font-size: 0.92rem;
    }

    .layout {
      display: grid;
      grid-template-columns: 240px minmax(320px, 1fr) minmax(320px, 1fr);
      gap: 1rem;
      padding: 1rem 1.25rem;
      align-items: start;
    }

    .panel {
      background: var(--panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 0.95rem;
      box-shadow: 0 1px 4px rgba(19, 43, 74, 0.06);
    }

    .panel h2 {
      margin: 0 0 0.7rem;
      font-size: 1.02rem;
    }

    textarea,
    input {
      width: 100%;
      border: 1px solid var(--border);
      border-radius: 8px;
      padding: 0.55rem 0.6rem;
      font: inherit;
      color: var(--text);
      background: #fbfcfe;
    }

    textarea {
      min-height: 170px;
      resize: vertical;
      font-family: "IBM Plex Mono", Consolas, monospace;
      font-size: 0.88rem;
    }

    .actions {
      display: flex;
      gap: 0.55rem;
      flex-wrap: wrap;
      margin-top: 0.65rem;
    }

    button {
      border: 1px solid var(--accent);
      background: var(--accent);
      color: #ffffff;
      border-radius: 8px;
      padding: 0.45rem 0.85rem;
      font: inherit;
      cursor: pointer;
    }

    button.secondary {
      background: var(--accent-soft);
      color: var(--accent);
    }

    button:disabled {
      opacity: 0.55;
      cursor: not-allowed;
    }

    pre {
      margin: 0;
      padding: 0.6rem;
      background: #0f1b2d;
      color: #e6edf7;
      border-radius: 8px;
      overflow: auto;
      max-height: 420px;
      font-size: 0.84rem;
      white-space: pre-wrap;
      word-break: break-word;
    }

    details {
      margin-top: 0.7rem;
    }

    summary {
      cursor: pointer;
      font-weight: 600;
      margin-bottom: 0.35rem;
    }

    .status {
      font-weight: 600;
      color: var(--muted);
    }

    .status.ok {
      color: var(--ok);
    }

    .status.warn {
      color: var(--warn);
    }

    .status.err {
      color: var(--err);
    }

    .history-list {
      list-style: none;
      margin: 0;
      padding: 0;
      display: grid;
      gap: 0.4rem;
      max-height: 70vh;
      overflow-y: auto;
    }

    .history-list li button {
      width: 100%;
      text-align: left;
      background: #f7f9fd;
      color: var(--text);
      border: 1px solid var(--border);
    }

    .history-meta {
      display: block;
      font-size: 0.78rem;
      color: var(--muted);
    }

    .verdict ul {
      margin: 0.4rem 0;
      padding-left: 1.2rem;
    }

    .chat-fab {
      position: fixed;
      right: 1.5rem;
      bottom: 1.5rem;
      width: 3.5rem;
      height: 3.5rem;
      border-radius: 50%;
      font-size: 1.3rem;
      box-shadow: 0 6px 18px rgba(19, 43, 74, 0.25);
    }

    .chat-overlay {
      position: fixed;
      inset: 0;
      display: none;
      align-items: center;
      justify-content: center;
      background: rgba(10, 20, 35, 0.5);
      padding: 1rem;
    }

    .chat-overlay.open {
      display: flex;
    }

    .chat-card {
      width: 100%;
      max-width: 640px;
      height: 600px;
      display: flex;
      flex-direction: column;
      background: var(--panel);
      border-radius: 12px;
      border: 1px solid var(--border);
    }

    .chat-head {
      display: flex;
      justify-content: space-between;
      align-items: center;
      padding: 0.8rem 1rem;
      border-bottom: 1px solid var(--border);
    }

    .chat-messages {
      flex: 1;
      overflow-y: auto;
      padding: 1rem;
      display: grid;
      gap: 0.6rem;
      align-content: start;
    }

    .bubble {
      max-width: 80%;
      padding: 0.5rem 0.75rem;
      border-radius: 10px;
      white-space: pre-wrap;
      word-break: break-word;
      font-size: 0.92rem;
    }

    .bubble.user {
      justify-self: end;
      background: var(--accent);
      color: #ffffff;
    }

    .bubble.assistant {
      justify-self: start;
      background: #eef2f8;
      border: 1px solid var(--border);
    }

    .bubble time {
      display: block;
      font-size: 0.72rem;
      opacity: 0.7;
      margin-top: 0.2rem;
    }

    .chat-input {
      display: flex;
      gap: 0.5rem;
      padding: 0.8rem 1rem;
      border-top: 1px solid var(--border);
    }

    @media (max-width: 980px) {
      .layout {
        grid-template-columns: 1fr;
      }
    }
  </style>
</head>
<body>
  <header>
    <h1>curl Tester</h1>
    <p>Paste a curl command, run it from the browser, and ask the assistant when something looks off.</p>
  </header>

  <div class="layout">
    <aside class="panel">
      <h2>History</h2>
      <ul class="history-list" id="historyList"></ul>
      <div class="actions">
        <button type="button" class="secondary" id="clearHistoryBtn">Clear History</button>
      </div>
    </aside>

    <main class="panel">
      <h2>curl Command</h2>
      <textarea id="curlInput" spellcheck="false" placeholder="curl -X GET https://httpbin.org/get -H 'Accept: application/json'"></textarea>
      <div class="actions">
        <button type="button" id="executeBtn">Execute</button>
        <button type="button" class="secondary" id="validateBtn">Validate with AI</button>
        <button type="button" class="secondary" id="clearBtn">Clear</button>
      </div>

      <section class="verdict" id="verdictPanel" hidden>
        <details open>
          <summary>AI Validation</summary>
          <div class="status" id="verdictStatus"></div>
          <ul id="verdictIssues"></ul>
          <p id="verdictExplanation"></p>
          <div id="verdictFixBlock" hidden>
            <pre id="verdictFix"></pre>
            <div class="actions">
              <button type="button" class="secondary" id="applyFixBtn">Apply fix</button>
            </div>
          </div>
        </details>
      </section>
    </main>

    <section class="panel">
      <h2>Response</h2>
      <div class="status" id="statusLine">Ready</div>

      <details open>
        <summary>Request</summary>
        <pre id="requestSummary">(none)</pre>
      </details>

      <details open>
        <summary>Response Headers</summary>
        <pre id="responseHeaders">(none)</pre>
      </details>

      <details open>
        <summary>Response Body</summary>
        <pre id="responseBody">(none)</pre>
      </details>
    </section>
  </div>

  <button type="button" class="chat-fab" id="chatOpenBtn" title="Need help? Ask AI">?</button>

  <div class="chat-overlay" id="chatOverlay">
    <div class="chat-card">
      <div class="chat-head">
        <strong>AI Assistant</strong>
        <button type="button" class="secondary" id="chatCloseBtn" title="Close chat">Close</button>
      </div>
      <div class="chat-messages" id="chatMessages"></div>
      <div class="chat-input">
        <input type="text" id="chatInput" placeholder="Ask me anything about APIs, curl, models...">
        <button type="button" id="chatSendBtn">Send</button>
      </div>
    </div>
  </div>

  <script>
    (function () {
      const HISTORY_STORAGE_KEY = "curl-tester-history";
      const HISTORY_LIMIT = 50;
      const VALUE_FLAGS_IGNORED = ["-o", "--output", "-m", "--max-time", "--connect-timeout", "-e", "--referer", "-b", "--cookie", "-A", "--user-agent"];
      const DATA_FLAGS = ["-d", "--data", "--data-raw", "--data-binary", "--data-ascii", "--data-urlencode"];
      const CHAT_GREETING =
        "Hi! I'm your AI assistant. I can help you with:\\n" +
        "- Writing and fixing curl commands\\n" +
        "- Explaining API endpoints\\n" +
        "- Providing example requests\\n" +
        "- Debugging REST API issues\\n\\n" +
        "What would you like help with?";

      const curlInputEl = document.getElementById("curlInput");
      const executeBtn = document.getElementById("executeBtn");
      const validateBtn = document.getElementById("validateBtn");
      const clearBtn = document.getElementById("clearBtn");
      const statusLineEl = document.getElementById("statusLine");
      const requestSummaryEl = document.getElementById("requestSummary");
      const responseHeadersEl = document.getElementById("responseHeaders");
      const responseBodyEl = document.getElementById("responseBody");
      const historyListEl = document.getElementById("historyList");
      const clearHistoryBtn = document.getElementById("clearHistoryBtn");
      const verdictPanelEl = document.getElementById("verdictPanel");
      const verdictStatusEl = document.getElementById("verdictStatus");
      const verdictIssuesEl = document.getElementById("verdictIssues");
      const verdictExplanationEl = document.getElementById("verdictExplanation");
      const verdictFixBlockEl = document.getElementById("verdictFixBlock");
      const verdictFixEl = document.getElementById("verdictFix");
      const applyFixBtn = document.getElementById("applyFixBtn");
      const chatOpenBtn = document.getElementById("chatOpenBtn");
      const chatCloseBtn = document.getElementById("chatCloseBtn");
      const chatOverlayEl = document.getElementById("chatOverlay");
      const chatMessagesEl = document.getElementById("chatMessages");
      const chatInputEl = document.getElementById("chatInput");
      const chatSendBtn = document.getElementById("chatSendBtn");

      const state = {
        response: null,
        isLoading: false,
        error: null,
        requestData: null,
        curlCommand: "",
        showChat: false
      };

      function setStatus(message, variant) {
        statusLineEl.textContent = message;
        statusLineEl.className = "status";
        if (variant) {
          statusLineEl.classList.add(variant);
        }
      }

      async function readErrorMessage(response) {
        const raw = await response.text();
        if (!raw) {
          return "HTTP " + response.status;
        }
        try {
          const parsed = JSON.parse(raw);
          if (parsed && typeof parsed.error === "string") {
            return parsed.error;
          }
          return JSON.stringify(parsed);
        } catch (_) {
          return raw;
        }
      }

      // Browser-side executor: picks method, URL, headers and body out of the pasted command.
      function tokenize(command) {
        const tokens = [];
        let current = "";
        let quote = null;
        let hasToken = false;
        const text = command.split("\\\\\\n").join(" ");

        for (let i = 0; i < text.length; i += 1) {
          const ch = text[i];
          if (quote) {
            if (ch === quote) {
              quote = null;
            } else if (ch === "\\\\" && quote === '"' && i + 1 < text.length) {
              i += 1;
              current += text[i];
            } else {
              current += ch;
            }
            continue;
          }
          if (ch === "'" || ch === '"') {
            quote = ch;
            hasToken = true;
            continue;
          }
          if (ch === "\\\\" && i + 1 < text.length) {
            i += 1;
            current += text[i];
            hasToken = true;
            continue;
          }
          if (ch === " " || ch === "\\t" || ch === "\\n" || ch === "\\r") {
            if (hasToken) {
              tokens.push(current);
              current = "";
              hasToken = false;
            }
            continue;
          }
          current += ch;
          hasToken = true;
        }
        if (quote) {
          throw new Error("Unterminated quote in command.");
        }
        if (hasToken) {
          tokens.push(current);
        }
        return tokens;
      }

      function describeCommand(command) {
        const tokens = tokenize(command.trim());
        if (tokens.length && tokens[0] === "curl") {
          tokens.shift();
        }

        const descriptor = { method: null, url: null, headers: {}, body: null };
        for (let i = 0; i < tokens.length; i += 1) {
          const token = tokens[i];
          const next = tokens[i + 1];
          if (token === "-X" || token === "--request") {
            descriptor.method = String(next || "GET").toUpperCase();
            i += 1;
          } else if (token === "-H" || token === "--header") {
            const separator = String(next || "").indexOf(":");
            if (separator > 0) {
              descriptor.headers[next.slice(0, separator).trim()] = next.slice(separator + 1).trim();
            }
            i += 1;
          } else if (DATA_FLAGS.indexOf(token) >= 0) {
            descriptor.body = descriptor.body === null ? String(next || "") : descriptor.body + "&" + String(next || "");
            i += 1;
          } else if (token === "--json") {
            descriptor.body = String(next || "");
            descriptor.headers["Content-Type"] = "application/json";
            descriptor.headers["Accept"] = "application/json";
            i += 1;
          } else if (token === "-u" || token === "--user") {
            descriptor.headers["Authorization"] = "Basic " + btoa(String(next || ""));
            i += 1;
          } else if (token === "-I" || token === "--head") {
            descriptor.method = "HEAD";
          } else if (token === "--url") {
            descriptor.url = next;
            i += 1;
          } else if (VALUE_FLAGS_IGNORED.indexOf(token) >= 0) {
            i += 1;
          } else if (token.startsWith("-")) {
            continue;
          } else if (!descriptor.url) {
            descriptor.url = token;
          }
        }

        if (!descriptor.url) {
          throw new Error("No URL found in command.");
        }
        if (!/^https?:[/][/]/i.test(descriptor.url)) {
          descriptor.url = "http://" + descriptor.url;
        }
        if (!descriptor.method) {
          descriptor.method = descriptor.body !== null ? "POST" : "GET";
        }
        if (descriptor.body !== null && !descriptor.headers["Content-Type"]) {
          descriptor.headers["Content-Type"] = "application/x-www-form-urlencoded";
        }
        return descriptor;
      }

      async function executeCurl(command, callbacks) {
        const descriptor = describeCommand(command);
        callbacks.onRequestData(descriptor);

        const start = performance.now();
        const response = await fetch(descriptor.url, {
          method: descriptor.method,
          headers: descriptor.headers,
          body: descriptor.method === "GET" || descriptor.method === "HEAD" ? undefined : descriptor.body
        });
        const elapsedMs = Math.round(performance.now() - start);

        const headers = {};
        response.headers.forEach(function (value, key) {
          headers[key] = value;
        });
        const result = {
          status: response.status,
          statusText: response.statusText,
          ok: response.ok,
          elapsedMs: elapsedMs,
          headers: headers,
          body: await response.text()
        };
        callbacks.onExecuted({
          command: command,
          method: descriptor.method,
          url: descriptor.url,
          timestamp: Date.now()
        });
        return result;
      }

      function loadHistory() {
        try {
          const parsed = JSON.parse(window.localStorage.getItem(HISTORY_STORAGE_KEY) || "[]");
          return Array.isArray(parsed) ? parsed : [];
        } catch (_) {
          return [];
        }
      }

      function saveHistory(entries) {
        window.localStorage.setItem(HISTORY_STORAGE_KEY, JSON.stringify(entries));
      }

      function addHistoryEntry(entry) {
        const entries = [entry].concat(loadHistory()).slice(0, HISTORY_LIMIT);
        saveHistory(entries);
        renderHistory();
      }

      function selectHistoryEntry(command) {
        state.curlCommand = command;
        curlInputEl.value = command;
        curlInputEl.focus();
      }

      function renderHistory() {
        historyListEl.innerHTML = "";
        const entries = loadHistory();
        if (!entries.length) {
          const empty = document.createElement("li");
          empty.className = "history-meta";
          empty.textContent = "No requests yet.";
          historyListEl.appendChild(empty);
          return;
        }
        entries.forEach(function (entry) {
          const item = document.createElement("li");
          const button = document.createElement("button");
          button.type = "button";
          button.textContent = entry.method + " " + entry.url;
          const meta = document.createElement("span");
          meta.className = "history-meta";
          meta.textContent = new Date(entry.timestamp).toLocaleString();
          button.appendChild(meta);
          button.title = entry.command;
          button.addEventListener("click", function () {
            selectHistoryEntry(entry.command);
          });
          item.appendChild(button);
          historyListEl.appendChild(item);
        });
      }

      function renderResponse() {
        if (state.requestData) {
          const headerLines = Object.keys(state.requestData.headers).map(function (name) {
            return name + ": " + state.requestData.headers[name];
          });
          requestSummaryEl.textContent = [state.requestData.method + " " + state.requestData.url].concat(headerLines).join("\\n");
        } else {
          requestSummaryEl.textContent = "(none)";
        }

        if (state.isLoading) {
          setStatus("Sending request...", "warn");
          return;
        }
        if (state.error) {
          setStatus("Request failed: " + state.error, "err");
          responseHeadersEl.textContent = "(none)";
          responseBodyEl.textContent = "(none)";
          return;
        }
        if (!state.response) {
          setStatus("Ready");
          responseHeadersEl.textContent = "(none)";
          responseBodyEl.textContent = "(none)";
          return;
        }

        const response = state.response;
        const variant = response.ok ? "ok" : (response.status >= 400 && response.status < 500 ? "warn" : "err");
        setStatus(response.status + " " + response.statusText + " (" + response.elapsedMs + " ms)", variant);

        const headerLines = Object.keys(response.headers).map(function (key) {
          return key + ": " + response.headers[key];
        });
        responseHeadersEl.textContent = headerLines.length ? headerLines.join("\\n") : "(none)";

        const contentType = response.headers["content-type"] || "";
        if (response.body && contentType.includes("json")) {
          try {
            responseBodyEl.textContent = JSON.stringify(JSON.parse(response.body), null, 2);
            return;
          } catch (_) {
            // fall through to raw text
          }
        }
        responseBodyEl.textContent = response.body || "(empty body)";
      }

      async function runCommand() {
        const command = curlInputEl.value.trim();
        if (!command || state.isLoading) {
          return;
        }
        state.curlCommand = command;
        state.isLoading = true;
        state.error = null;
        executeBtn.disabled = true;
        renderResponse();

        try {
          state.response = await executeCurl(command, {
            onRequestData: function (descriptor) {
              state.requestData = descriptor;
            },
            onExecuted: addHistoryEntry
          });
        } catch (error) {
          state.response = null;
          state.error = error.message;
        } finally {
          state.isLoading = false;
          executeBtn.disabled = false;
          renderResponse();
        }
      }

      function renderVerdict(verdict) {
        verdictPanelEl.hidden = false;
        verdictIssuesEl.innerHTML = "";
        verdictStatusEl.className = "status " + (verdict.isValid ? "ok" : "err");
        verdictStatusEl.textContent = verdict.isValid ? "Looks valid" : "Issues found";

        (Array.isArray(verdict.issues) ? verdict.issues : []).forEach(function (issue) {
          const item = document.createElement("li");
          item.textContent = String(issue);
          verdictIssuesEl.appendChild(item);
        });
        verdictExplanationEl.textContent = verdict.explanation ? String(verdict.explanation) : "";

        if (typeof verdict.suggestedFix === "string" && verdict.suggestedFix) {
          verdictFixEl.textContent = verdict.suggestedFix;
          verdictFixBlockEl.hidden = false;
        } else {
          verdictFixEl.textContent = "";
          verdictFixBlockEl.hidden = true;
        }
      }

      async function validateCommand() {
        const command = curlInputEl.value.trim();
        if (!command) {
          return;
        }
        validateBtn.disabled = true;
        verdictPanelEl.hidden = false;
        verdictStatusEl.className = "status warn";
        verdictStatusEl.textContent = "Validating...";

        try {
          const response = await fetch("/api/validate-curl", {
            method: "POST",
            headers: { "Content-Type": "application/json" },
            body: JSON.stringify({ curlCommand: command })
          });
          if (!response.ok) {
            throw new Error(await readErrorMessage(response));
          }
          renderVerdict(await response.json());
        } catch (error) {
          verdictIssuesEl.innerHTML = "";
          verdictFixBlockEl.hidden = true;
          verdictExplanationEl.textContent = "";
          verdictStatusEl.className = "status err";
          verdictStatusEl.textContent = "Validation failed: " + error.message;
        } finally {
          validateBtn.disabled = false;
        }
      }

      const chat = {
        messages: [{ role: "assistant", content: CHAT_GREETING, timestamp: Date.now() }],
        isLoading: false
      };

      function renderChat() {
        chatMessagesEl.innerHTML = "";
        chat.messages.forEach(function (message) {
          const bubble = document.createElement("div");
          bubble.className = "bubble " + message.role;
          bubble.textContent = message.content;
          const time = document.createElement("time");
          time.textContent = new Date(message.timestamp).toLocaleTimeString([], { hour: "2-digit", minute: "2-digit" });
          bubble.appendChild(time);
          chatMessagesEl.appendChild(bubble);
        });
        if (chat.isLoading) {
          const pending = document.createElement("div");
          pending.className = "bubble assistant";
          pending.textContent = "...";
          chatMessagesEl.appendChild(pending);
        }
        chatSendBtn.disabled = chat.isLoading || !chatInputEl.value.trim();
        chatInputEl.disabled = chat.isLoading;
        chatMessagesEl.scrollTop = chatMessagesEl.scrollHeight;
      }

      async function sendChatMessage() {
        const text = chatInputEl.value;
        if (!text.trim() || chat.isLoading) {
          return;
        }

        const turns = chat.messages.map(function (message) {
          return { role: message.role, content: message.content };
        });
        turns.push({ role: "user", content: text });

        chat.messages.push({ role: "user", content: text, timestamp: Date.now() });
        chatInputEl.value = "";
        chat.isLoading = true;
        renderChat();

        try {
          const response = await fetch("/api/chat", {
            method: "POST",
            headers: { "Content-Type": "application/json" },
            body: JSON.stringify({ messages: turns })
          });
          if (!response.ok) {
            throw new Error(await readErrorMessage(response));
          }
          const data = await response.json();
          chat.messages.push({ role: "assistant", content: data.content, timestamp: Date.now() });
        } catch (error) {
          chat.messages.push({
            role: "assistant",
            content: "Sorry, I encountered an error: " + error.message + ". Please try again.",
            timestamp: Date.now()
          });
        } finally {
          chat.isLoading = false;
          renderChat();
          chatInputEl.focus();
        }
      }

      function setChatOpen(open) {
        state.showChat = open;
        chatOverlayEl.classList.toggle("open", open);
        if (open) {
          renderChat();
          chatInputEl.focus();
        }
      }

      executeBtn.addEventListener("click", runCommand);
      validateBtn.addEventListener("click", validateCommand);
      clearBtn.addEventListener("click", function () {
        curlInputEl.value = "";
        state.curlCommand = "";
        state.response = null;
        state.error = null;
        state.requestData = null;
        verdictPanelEl.hidden = true;
        renderResponse();
      });
      applyFixBtn.addEventListener("click", function () {
        selectHistoryEntry(verdictFixEl.textContent);
      });
      clearHistoryBtn.addEventListener("click", function () {
        saveHistory([]);
        renderHistory();
      });
      curlInputEl.addEventListener("input", function () {
        state.curlCommand = curlInputEl.value;
      });
      curlInputEl.addEventListener("keydown", function (event) {
        if (event.key === "Enter" && (event.metaKey || event.ctrlKey)) {
          event.preventDefault();
          runCommand();
        }
      });

      chatOpenBtn.addEventListener("click", function () {
        setChatOpen(true);
      });
      chatCloseBtn.addEventListener("click", function () {
        setChatOpen(false);
      });
      chatSendBtn.addEventListener("click", sendChatMessage);
      chatInputEl.addEventListener("input", function () {
        chatSendBtn.disabled = chat.isLoading || !chatInputEl.value.trim();
      });
      chatInputEl.addEventListener("keydown", function (event) {
        if (event.key === "Enter") {
          event.preventDefault();
          sendChatMessage();
        }
      });

      renderHistory();
      renderResponse();
    })();
  </script>
</body>
</html>
"""
